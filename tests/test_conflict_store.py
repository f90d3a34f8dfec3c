import json
from datetime import datetime, timedelta, timezone

from octagon.conflict_store import ConflictStore, remove_expired
from octagon.models import Conflict, ConflictPlayer


def _conflict(reason, expiration=None):
    return Conflict(
        priority=1,
        reason=reason,
        players=[ConflictPlayer("Player1", 123), ConflictPlayer("Player2", 456)],
        expiration=expiration,
    )


def test_remove_expired_conflicts():
    now = datetime.now(timezone.utc)
    conflicts = [
        Conflict(reason="active"),
        Conflict(reason="expired", expiration=now - timedelta(hours=1)),
        Conflict(reason="future", expiration=now + timedelta(hours=1)),
    ]
    active = remove_expired(conflicts)
    assert len(active) == 2
    assert all(c.reason != "expired" for c in active)


def test_write_read_conflicts_file(tmp_path):
    store = ConflictStore(tmp_path)
    store.write([_conflict("test conflict")], "test_conflicts.json")
    read = store.read("test_conflicts.json")
    assert len(read) == 1
    assert read[0].reason == "test conflict"
    assert len(read[0].players) == 2
    assert read[0] == _conflict("test conflict")


def test_read_missing_and_invalid(tmp_path):
    store = ConflictStore(tmp_path)
    assert store.read() == []
    (tmp_path / "conflicts.json").write_text("{broken")
    assert store.read() == []


def test_save_conflict_appends(tmp_path):
    store = ConflictStore(tmp_path)
    store.save_conflict(_conflict("first"))
    store.save_conflict(_conflict("second"))
    assert [c.reason for c in store.read()] == ["first", "second"]


def test_get_conflicts_rewrites_expired(tmp_path):
    store = ConflictStore(tmp_path)
    past = datetime.now(timezone.utc) - timedelta(days=1)
    store.write([_conflict("keep"), _conflict("old", past)])
    assert [c.reason for c in store.get_conflicts()] == ["keep"]
    on_disk = json.loads((tmp_path / "conflicts.json").read_text())
    assert [c["reason"] for c in on_disk] == ["keep"]


def test_get_conflicts_includes_extra_files(tmp_path):
    store = ConflictStore(tmp_path)
    store.write([_conflict("main")])
    store.write([_conflict("extra")], "more.json")
    assert [c.reason for c in store.get_conflicts(["more.json"])] == ["main", "extra"]
    assert [c.reason for c in store.read()] == ["main"]