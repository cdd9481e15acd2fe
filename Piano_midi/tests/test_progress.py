import json
from datetime import datetime, timezone
import pytest
from progress import ProgressStore

def test_missing_file_is_empty(store):
    assert dict(store.load()) == {}
    assert store.get("anything").times_completed == 0
    assert store.get("anything").last_verdict == "Not started"

def test_record_persists_and_counts(tmp_path):
    path = tmp_path / "sub" / "progress.json"
    store = ProgressStore(path)
    when = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    store.record("Warmup: 5-finger C position", "Needs work", when)
    prog = store.record("warmup: 5-FINGER c position", "Pass", when)
    assert prog.times_completed == 2
    assert prog.last_verdict == "Pass"

    reopened = ProgressStore(path)
    snapshot = reopened.load()
    assert list(snapshot) == ["Warmup: 5-finger C position"]
    assert snapshot["Warmup: 5-finger C position"].last_completed_utc == when
    assert json.loads(path.read_text())["Warmup: 5-finger C position"]["times_completed"] == 2

def test_snapshot_is_read_only(store):
    store.record("a", "Pass")
    snapshot = store.load()
    with pytest.raises(TypeError):
        snapshot["b"] = None
    store.record("b", "Pass")
    assert "b" not in snapshot

def test_corrupt_file_loads_empty(tmp_path, capsys):
    path = tmp_path / "progress.json"
    path.write_text("{broken")
    store = ProgressStore(path)
    assert dict(store.load()) == {}
    assert "[WARN]" in capsys.readouterr().out

def test_unwritable_location_is_reported(tmp_path, capsys):
    blocker = tmp_path / "file"
    blocker.write_text("")
    store = ProgressStore(blocker / "progress.json")
    prog = store.record("a", "Pass")
    assert prog.times_completed == 1
    assert "[WARN]" in capsys.readouterr().out
