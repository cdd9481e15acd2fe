import json
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional
from pp_types import TaskProgress
from config import PROGRESS_FILE

class ProgressStore:
    """
    Per-task completion record kept in a JSON file.

    Task names are matched case-insensitively. Persistence is best effort:
    a missing or unreadable file loads as empty and failed writes are reported
    and otherwise ignored.
    """
    def __init__(self, path=PROGRESS_FILE):
        self.path = Path(path)
        self._records: dict[str, tuple[str, TaskProgress]] = {}
        self.reload()

    def reload(self):
        self._records = {}
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            for name, rec in data.items():
                self._records[name.casefold()] = (name, _from_json(rec))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            print(f"[WARN] Could not read progress file '{self.path}': {e}")
            self._records = {}

    def load(self) -> Mapping[str, TaskProgress]:
        return MappingProxyType({name: prog for name, prog in self._records.values()})

    def get(self, name: str) -> TaskProgress:
        entry = self._records.get(name.casefold())
        return entry[1] if entry else TaskProgress()

    def record(self, name: str, verdict: str, when: Optional[datetime] = None) -> TaskProgress:
        prev = self.get(name)
        prog = TaskProgress(
            times_completed=prev.times_completed + 1,
            last_verdict=verdict,
            last_completed_utc=when or datetime.now(timezone.utc),
        )
        key = name.casefold()
        stored_name = self._records[key][0] if key in self._records else name
        self._records[key] = (stored_name, prog)
        self.save()
        return prog

    def save(self):
        data = {name: _to_json(prog) for name, prog in self._records.values()}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            print(f"[WARN] Could not save progress to '{self.path}': {e}")

def _to_json(prog: TaskProgress) -> dict:
    return {
        "times_completed": prog.times_completed,
        "last_verdict": prog.last_verdict,
        "last_completed_utc": prog.last_completed_utc.isoformat() if prog.last_completed_utc else None,
    }

def _from_json(rec: dict) -> TaskProgress:
    when = rec.get("last_completed_utc")
    return TaskProgress(
        times_completed=int(rec.get("times_completed", 0)),
        last_verdict=rec.get("last_verdict", TaskProgress().last_verdict),
        last_completed_utc=datetime.fromisoformat(when) if when else None,
    )
