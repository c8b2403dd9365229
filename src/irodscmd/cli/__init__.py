"""irodscmd CLI: upload, list, and remove data in iRODS."""

from ._helpers import main  # noqa: F401 (entry point)

# Import command modules to register Click commands with the main group.
from . import _basic, _put  # noqa: F401
