import json

import pytest

from statestore_lib.storage.file_backend import JsonFileBackend
from statestore_lib.storage.serializer import YAMLSerializer


def test_write_read_delete_and_list_keys(tmp_path):
    b = JsonFileBackend(tmp_path / "unittest")
    key = "item1"
    value = {"x": 1}

    b.write(key, value)
    assert b.exists(key) is True
    assert key in list(b.list_keys())
    assert b.read(key) == value
    b.delete(key)
    assert b.exists(key) is False
    with pytest.raises(KeyError):
        b.read(key)
    # deleting again is fine
    b.delete(key)


def test_creates_directory_and_empty_document(tmp_path):
    path = tmp_path / "a" / "b"
    b = JsonFileBackend(path)
    assert b.document_path == path / "db.json"
    assert json.loads(b.document_path.read_text()) == {}


def test_existing_document_is_kept(tmp_path):
    first = JsonFileBackend(tmp_path)
    first.write("k", [1, 2])
    second = JsonFileBackend(tmp_path)
    assert second.read("k") == [1, 2]


def test_document_is_flat_mapping_on_disk(tmp_path):
    b = JsonFileBackend(tmp_path)
    b.write("n", None)
    b.write("nested", {"a": {"b": True}})
    assert json.loads(b.document_path.read_text()) == {"n": None, "nested": {"a": {"b": True}}}
    assert b.exists("n") and b.read("n") is None
    assert not list(tmp_path.glob("*.tmp"))


def test_empty_file_reads_as_empty_document(tmp_path):
    b = JsonFileBackend(tmp_path)
    b.document_path.write_bytes(b"")
    assert list(b.list_keys()) == []
    b.write("k", 1)
    assert b.read("k") == 1


def test_non_mapping_document_is_an_error(tmp_path):
    b = JsonFileBackend(tmp_path)
    b.document_path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        b.read("k")


def test_yaml_serializer_changes_document_name(tmp_path):
    b = JsonFileBackend(tmp_path, serializer=YAMLSerializer())
    b.write("k", {"v": 1})
    assert b.document_path.name == "db.yaml"
    assert "k:" in b.document_path.read_text()
    assert JsonFileBackend(tmp_path, serializer=YAMLSerializer()).read("k") == {"v": 1}
