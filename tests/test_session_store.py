from stockroom.auth.session_store import JsonFileSessionStore, MemorySessionStore


def test_memory_store_round_trip():
    session = MemorySessionStore({"theme": "dark"})
    assert session.load("theme") == "dark"
    session.save("theme", "light")
    session.clear("theme")
    assert session.load("theme") is None
    session.clear("missing")


def test_json_store_persists_between_instances(tmp_path):
    path = tmp_path / "session.json"
    JsonFileSessionStore(path).save("currentUser", {"id": "1"})
    other = JsonFileSessionStore(path)
    assert other.load("currentUser") == {"id": "1"}
    other.clear("currentUser")
    assert JsonFileSessionStore(path).load("currentUser") is None


def test_json_store_missing_file(tmp_path):
    assert JsonFileSessionStore(tmp_path / "absent.json").load("theme") is None


def test_json_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json")
    session = JsonFileSessionStore(path)
    assert session.load("theme") is None
    session.save("theme", "dark")
    assert session.load("theme") == "dark"


def test_json_store_namespaces_are_isolated(tmp_path):
    path = tmp_path / "session.json"
    first = JsonFileSessionStore(path, namespace="a")
    second = JsonFileSessionStore(path, namespace="b")
    first.save("theme", "dark")
    assert second.load("theme") is None
    second.save("theme", "light")
    second.clear("theme")
    assert first.load("theme") == "dark"
    assert JsonFileSessionStore(path, namespace="a").load("theme") == "dark"
