from __future__ import annotations

from store_client.core.storage import FileTokenStorage, MemoryTokenStorage


def test_memory_storage_roundtrip() -> None:
    storage = MemoryTokenStorage()
    assert storage.get("authToken") is None

    storage.set("authToken", "abc")
    assert storage.get("authToken") == "abc"

    storage.remove("authToken")
    storage.remove("authToken")
    assert storage.get("authToken") is None


def test_file_storage_persists_across_instances(tmp_path) -> None:
    path = tmp_path / "nested" / "storage.json"

    FileTokenStorage(str(path)).set("authToken", "abc")

    assert path.exists()
    assert FileTokenStorage(str(path)).get("authToken") == "abc"


def test_file_storage_keeps_other_keys(tmp_path) -> None:
    storage = FileTokenStorage(str(tmp_path / "storage.json"))
    storage.set("theme", "dark")
    storage.set("authToken", "abc")

    storage.remove("authToken")

    assert storage.get("authToken") is None
    assert storage.get("theme") == "dark"


def test_file_storage_missing_or_corrupt_reads_empty(tmp_path) -> None:
    path = tmp_path / "storage.json"
    assert FileTokenStorage(str(path)).get("authToken") is None

    path.write_text("{not json", encoding="utf-8")
    storage = FileTokenStorage(str(path))
    assert storage.get("authToken") is None

    storage.set("authToken", "fresh")
    assert storage.get("authToken") == "fresh"
