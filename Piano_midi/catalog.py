# Practice plan as data. Records use the same shape as a --catalog JSON file:
#   {"name", "description", "notes": [...], "fingering": [[note, finger, "R"|"L"], ...],
#    "midi": bool, "metronome": bool, "bpm", "tol_ms", "min_note_acc", "min_metronome_acc", "toc"}
# Only name is required; everything else falls back to the PracticeTask defaults.

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from pp_types import FingeredNote, Hand, PracticeTask

# (key, hand, notes, fingers) for the one-octave scales
SCALES = [
    ("G",  "R", [67, 69, 71, 72, 74, 76, 78, 79], "1-2-3-1-2-3-4-5"),
    ("D",  "R", [62, 64, 66, 67, 69, 71, 73, 74], "1-2-3-1-2-3-4-5"),
    ("A",  "R", [69, 71, 73, 74, 76, 78, 80, 81], "1-2-3-1-2-3-4-5"),
    ("E",  "R", [64, 66, 68, 69, 71, 73, 75, 76], "1-2-3-1-2-3-4-5"),
    ("B",  "R", [71, 73, 75, 76, 78, 80, 82, 83], "1-2-3-1-2-3-4-5"),
    ("F#", "R", [66, 68, 70, 71, 73, 75, 77, 78], "2-3-4-1-2-3-4-1"),
    ("C#", "R", [61, 63, 65, 66, 68, 70, 72, 73], "2-3-4-1-2-3-4-1"),
    ("F",  "R", [65, 67, 69, 70, 72, 74, 76, 77], "1-2-3-4-1-2-3-4"),
    ("Bb", "R", [70, 72, 74, 75, 77, 79, 81, 82], "2-3-4-1-2-3-4-1"),
    ("Eb", "R", [63, 65, 67, 68, 70, 72, 74, 75], "3-4-1-2-3-4-1-2"),
    ("Ab", "R", [68, 70, 72, 73, 75, 77, 79, 80], "3-4-1-2-3-4-1-2"),
    ("Db", "R", [61, 63, 65, 66, 68, 70, 72, 73], "2-3-4-1-2-3-4-1"),
    ("Gb", "R", [66, 68, 70, 71, 73, 75, 77, 78], "2-3-4-1-2-3-4-1"),
    ("G",  "L", [67, 69, 71, 72, 74, 76, 78, 79], "5-4-3-2-1-3-2-1"),
    ("D",  "L", [62, 64, 66, 67, 69, 71, 73, 74], "5-4-3-2-1-3-2-1"),
    ("A",  "L", [69, 71, 73, 74, 76, 78, 80, 81], "5-4-3-2-1-3-2-1"),
    ("E",  "L", [64, 66, 68, 69, 71, 73, 75, 76], "5-4-3-2-1-3-2-1"),
    ("B",  "L", [71, 73, 75, 76, 78, 80, 82, 83], "4-3-2-1-4-3-2-1"),
    ("F#", "L", [66, 68, 70, 71, 73, 75, 77, 78], "4-3-2-1-4-3-2-1"),
    ("C#", "L", [61, 63, 65, 66, 68, 70, 72, 73], "3-2-1-4-3-2-1-4"),
    ("F",  "L", [65, 67, 69, 70, 72, 74, 76, 77], "5-4-3-2-1-4-3-2"),
    ("Bb", "L", [70, 72, 74, 75, 77, 79, 81, 82], "3-2-1-4-3-2-1-4"),
    ("Eb", "L", [63, 65, 67, 68, 70, 72, 74, 75], "3-2-1-4-3-2-1-4"),
    ("Ab", "L", [68, 70, 72, 73, 75, 77, 79, 80], "3-2-1-4-3-2-1-4"),
    ("Db", "L", [61, 63, 65, 66, 68, 70, 72, 73], "3-2-1-4-3-2-1-4"),
    ("Gb", "L", [66, 68, 70, 71, 73, 75, 77, 78], "4-3-2-1-4-3-2-1"),
]

HAND_WORDS = {"R": ("RH", "right hand"), "L": ("LH", "left hand")}

def _scale_record(key, hand, notes, fingers):
    short, long = HAND_WORDS[hand]
    return {
        "name": f"Scales: {key} major ({short})",
        "description": f"Play {key} major one octave, {long}. Fingering: {fingers}.",
        "notes": notes,
        "fingering": [[n, int(f), hand] for n, f in zip(notes, fingers.split("-"))],
        "min_note_acc": 0.95,
    }

PLAN = [
    {
        "name": "Warmup: 5-finger C position",
        "description": "Place RH fingers 1-5 on C-D-E-F-G. Play up and down with relaxed wrist "
                       "and even tone. Keep fingertips curved.",
        "notes": [60, 62, 64, 65, 67, 65, 64, 62, 60],
        "fingering": [[60, 1, "R"], [62, 2, "R"], [64, 3, "R"], [65, 4, "R"], [67, 5, "R"]],
        "min_note_acc": 1.0,
    },
    {
        "name": "Scales: C major (hands together)",
        "description": "Play C major one octave, hands together. RH: 1-2-3-1-2-3-4-5. "
                       "LH: 5-4-3-2-1-3-2-1. Keep crossings smooth.",
        "notes": [60, 62, 64, 65, 67, 69, 71, 72],
        "fingering": [[60, 1, "R"], [62, 2, "R"], [64, 3, "R"], [65, 1, "R"],
                      [67, 2, "R"], [69, 3, "R"], [71, 4, "R"], [72, 5, "R"],
                      [60, 5, "L"], [62, 4, "L"], [64, 3, "L"], [65, 2, "L"],
                      [67, 1, "L"], [69, 3, "L"], [71, 2, "L"], [72, 1, "L"]],
        "min_note_acc": 0.95,
    },
    *[_scale_record(*row) for row in SCALES],
    {
        "name": "Rhythm: quarter notes @ 70 bpm",
        "description": "Play steady quarter notes at 70 bpm. Focus on even timing.",
        "midi": False, "metronome": True, "bpm": 70, "tol_ms": 120,
    },
    {
        "name": "Rhythm: eighth notes @ 80 bpm",
        "description": "Play even eighth notes at 80 bpm.",
        "midi": False, "metronome": True, "bpm": 80, "tol_ms": 120,
    },
    {
        "name": "Chords: C-G-Am-F broken",
        "description": "Play broken chord progression C-G-Am-F with steady rhythm.",
        "notes": [60, 64, 67, 67, 71, 74, 69, 72, 76, 65, 69, 72],
        "fingering": [[60, 1, "R"], [64, 3, "R"], [67, 5, "R"]],
        "min_note_acc": 0.9,
    },
    {
        "name": "Reading: simple melody @ 72 bpm",
        "description": "Sight-read a simple melody at 72 bpm.",
        "midi": False, "metronome": True, "bpm": 72, "tol_ms": 150,
    },
    {
        "name": "Repertoire: phrase practice @ 76 bpm",
        "description": "Practice a short phrase at 76 bpm, keeping dynamics consistent.",
        "midi": False, "metronome": True, "bpm": 76, "tol_ms": 150,
    },
    {"name": "Ear Training: interval recognition (2nds & 3rds)",
     "description": "Play and identify 2nds and 3rds by ear.",
     "midi": False, "toc": "Intervals: 2nds & 3rds"},
    {"name": "Ear Training: interval recognition (4ths & 5ths)",
     "description": "Play and identify 4ths and 5ths by ear.",
     "midi": False, "toc": "Intervals: 4ths & 5ths"},
    {"name": "Ear Training: interval recognition (6ths & 7ths)",
     "description": "Play and identify 6ths and 7ths by ear.",
     "midi": False, "toc": "Intervals: 6ths & 7ths"},
    {"name": "Ear Training: chord quality (triads)",
     "description": "Identify major, minor, diminished, and augmented triads.",
     "midi": False, "toc": "Chord quality: triads"},
    {"name": "Ear Training: chord quality (7ths)",
     "description": "Identify common 7th chord qualities.",
     "midi": False, "toc": "Chord quality: 7ths"},
    {"name": "Ear Training: scale degrees",
     "description": "Identify scale degrees by ear in major keys.",
     "midi": False},
    {"name": "Ear Training: melodic dictation (short phrases)",
     "description": "Transcribe short melodic phrases by ear.",
     "midi": False, "toc": "Dictation: melodic phrases"},
    {"name": "Ear Training: rhythm dictation",
     "description": "Transcribe rhythm patterns by ear.",
     "midi": False, "toc": "Dictation: rhythm"},
]

# Name prefix -> table of contents group, in display order
TOC_GROUPS = {
    "Warmup": "Warmup",
    "Scales": "Scales",
    "Rhythm": "Rhythm & Metronome",
    "Chords": "Chords & Progressions",
    "Reading": "Reading",
    "Repertoire": "Repertoire",
    "Ear Training": "Ear Training",
}

HANDS = {"R": Hand.RIGHT, "L": Hand.LEFT, "right": Hand.RIGHT, "left": Hand.LEFT}

@dataclass(frozen=True)
class TocItem:
    title: str
    task: PracticeTask

@dataclass(frozen=True)
class TocGroup:
    title: str
    items: tuple[TocItem, ...]

def task_from_record(rec: dict) -> PracticeTask:
    try:
        fingering = [FingeredNote(int(n), int(f), HANDS[h]) for n, f, h in rec.get("fingering", [])]
        kwargs = {
            "name": rec["name"],
            "description": rec.get("description", ""),
            "expected_notes": [int(n) for n in rec.get("notes", [])],
            "fingering_notes": fingering,
            "requires_midi_input": rec.get("midi", True),
            "require_metronome": rec.get("metronome", False),
        }
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Bad task record {rec!r}: {e}") from e
    optional = {"bpm": "tempo_bpm", "tol_ms": "beat_tolerance_ms",
                "min_note_acc": "min_note_accuracy", "min_metronome_acc": "min_metronome_accuracy"}
    for key, field_name in optional.items():
        if key in rec:
            kwargs[field_name] = rec[key]
    return PracticeTask(**kwargs)

def build_plan(records: list[dict]) -> list[PracticeTask]:
    return [task_from_record(r) for r in records]

def default_plan() -> list[PracticeTask]:
    return build_plan(PLAN)

def load_catalog(path) -> list[PracticeTask]:
    try:
        records = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path}: not valid JSON ({e})") from e
    if not isinstance(records, list):
        raise ValueError(f"{path}: expected a list of task records")
    return build_plan(records)

def find_task(plan: list[PracticeTask], name: str) -> PracticeTask:
    wanted = name.casefold()
    for task in plan:
        if task.name.casefold() == wanted:
            return task
    raise KeyError(name)

def _toc_title(task: PracticeTask, records_by_name: dict) -> str:
    rec = records_by_name.get(task.name, {})
    if "toc" in rec:
        return rec["toc"]
    _, _, rest = task.name.partition(": ")
    rest = rest or task.name
    return rest[:1].upper() + rest[1:]

def default_toc(plan: list[PracticeTask], records: Optional[list[dict]] = None) -> list[TocGroup]:
    """Group tasks by their 'Prefix: ' name; tasks without a known prefix land in 'Other'."""
    by_name = {r["name"]: r for r in (PLAN if records is None else records)}
    grouped: dict[str, list[TocItem]] = {title: [] for title in TOC_GROUPS.values()}
    for task in plan:
        prefix = task.name.partition(": ")[0]
        group = TOC_GROUPS.get(prefix, "Other")
        grouped.setdefault(group, []).append(TocItem(_toc_title(task, by_name), task))
    return [TocGroup(title, tuple(items)) for title, items in grouped.items() if items]
