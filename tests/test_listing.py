"""Tests for listing collections and data objects."""

from datetime import datetime

import pytest

from irodscmd.exceptions import PermissionDeniedError, RemoteNotFoundError
from irodscmd.listing import Verbosity, format_listing, format_time, list_path, status_mark
from irodscmd.remote import CollectionInfo, ReplicaInfo


HOME = "/tempZone/home/alice"


def _replica(number, status, checksum="sha2:abc", path="/vault/x"):
    return ReplicaInfo(owner="alice", number=number, resource_hierarchy="demoResc;leaf",
                       size=5, modify_time=datetime(2024, 3, 1, 9, 5), status=status,
                       checksum=checksum, path=path)


class TestStatusMark:
    @pytest.mark.parametrize("status, mark", [("1", "&"), ("0", "X"), ("9", "?"), ("", "?"), ("good", "?")])
    def test_mapping(self, status, mark):
        assert status_mark(status) == mark

    def test_non_string_status(self):
        assert status_mark(1) == "&"
        assert status_mark(None) == "?"


class TestShort:
    def test_sorted_objects_then_collections(self, remote):
        text = list_path(remote, f"{HOME}/data")
        assert text.splitlines() == [
            "  a.bin",
            "  b.bin",
            f"  C- {HOME}/data/y",
            f"  C- {HOME}/data/z",
        ]

    def test_stable_sort(self):
        colls = [CollectionInfo(path="/z/b", name="b"), CollectionInfo(path="/z/a", name="a")]
        assert format_listing([], colls) == ["  C- /z/a", "  C- /z/b"]

    def test_empty_collection(self, remote):
        assert list_path(remote, f"{HOME}/work") == ""

    def test_data_object_path(self, remote):
        assert list_path(remote, f"{HOME}/hello.txt") == "  hello.txt\n"

    def test_data_object_lookup_order(self, remote):
        list_path(remote, f"{HOME}/hello.txt")
        assert remote.calls == [
            ("stat_collection", f"{HOME}/hello.txt"),
            ("stat_collection", HOME),
            ("get_data_object", f"{HOME}/hello.txt"),
        ]


class TestLong:
    def test_one_line_per_replica(self, remote):
        remote.add_object(f"{HOME}/multi.dat", size=5,
                          replicas=[_replica(0, "1"), _replica(1, "0"), _replica(2, "7")])
        text = list_path(remote, f"{HOME}/multi.dat", Verbosity.LONG)
        assert text.splitlines() == [
            "  alice\t0\tdemoResc;leaf\t5\t2024-03-01.09:05\t&\tmulti.dat",
            "  alice\t1\tdemoResc;leaf\t5\t2024-03-01.09:05\tX\tmulti.dat",
            "  alice\t2\tdemoResc;leaf\t5\t2024-03-01.09:05\t?\tmulti.dat",
        ]

    def test_collection_long(self, remote):
        lines = list_path(remote, f"{HOME}/data", Verbosity.LONG).splitlines()
        assert lines[0].endswith("\t&\ta.bin")
        assert lines[1].endswith("\t&\tb.bin")
        assert lines[2:] == [f"  C- {HOME}/data/y", f"  C- {HOME}/data/z"]


class TestVeryLong:
    def test_checksum_and_path_lines(self, remote):
        remote.add_object(f"{HOME}/multi.dat", size=5,
                          replicas=[_replica(0, "1", "sha2:one", "/vault/a"),
                                    _replica(1, "1", "sha2:two", "/vault/b")])
        text = list_path(remote, f"{HOME}/multi.dat", Verbosity.VERY_LONG)
        assert text.splitlines() == [
            "  alice\t0\tdemoResc;leaf\t5\t2024-03-01.09:05\t&\tmulti.dat",
            "    sha2:one\t/vault/a",
            "  alice\t1\tdemoResc;leaf\t5\t2024-03-01.09:05\t&\tmulti.dat",
            "    sha2:two\t/vault/b",
        ]


class TestListErrors:
    def test_not_found(self, remote):
        with pytest.raises(RemoteNotFoundError):
            list_path(remote, f"{HOME}/nope")

    def test_missing_parent_not_found(self, remote):
        with pytest.raises(RemoteNotFoundError):
            list_path(remote, f"{HOME}/nope/deeper")

    def test_parent_failure_propagates(self, remote):
        remote.fail[("stat_collection", HOME)] = PermissionDeniedError("permission denied", path=HOME)
        with pytest.raises(PermissionDeniedError):
            list_path(remote, f"{HOME}/hello.txt")

    def test_collection_failure_other_than_not_found_propagates(self, remote):
        remote.fail[("stat_collection", f"{HOME}/data")] = PermissionDeniedError(
            "permission denied", path=f"{HOME}/data")
        with pytest.raises(PermissionDeniedError):
            list_path(remote, f"{HOME}/data")
        assert len(remote.calls) == 1


class TestFormatTime:
    def test_format(self):
        assert format_time(datetime(2024, 1, 15, 14, 30, 59)) == "2024-01-15.14:30"

    def test_none(self):
        assert format_time(None) == ""
