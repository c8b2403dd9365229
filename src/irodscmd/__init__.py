from .paths import SessionContext, resolve, normalize
from .config import Config, load_config, env_flag, stored_password
from .remote import RemoteFS, IRODSRemoteFS, CollectionInfo, DataObjectInfo, ReplicaInfo, connect, open_remote
from .classify import Collection, DataObject, NotFound, RemoteEntry, classify
from .upload import OperationOutcome, UploadReport, put_tree
from .remove import remove_path
from .listing import Verbosity, list_path, format_listing, status_mark
from .exceptions import (
    IRODSCmdError, RemoteNotFoundError, PermissionDeniedError, AlreadyExistsError,
    SafetyGateError, TransportError, ArgumentError, ConfigError, RemoteError,
)

__all__ = [
    "SessionContext", "resolve", "normalize",
    "Config", "load_config", "env_flag", "stored_password",
    "RemoteFS", "IRODSRemoteFS", "CollectionInfo", "DataObjectInfo", "ReplicaInfo",
    "connect", "open_remote",
    "Collection", "DataObject", "NotFound", "RemoteEntry", "classify",
    "OperationOutcome", "UploadReport", "put_tree",
    "remove_path",
    "Verbosity", "list_path", "format_listing", "status_mark",
    "IRODSCmdError", "RemoteNotFoundError", "PermissionDeniedError", "AlreadyExistsError",
    "SafetyGateError", "TransportError", "ArgumentError", "ConfigError", "RemoteError",
]
