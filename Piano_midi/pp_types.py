from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Protocol
from config import (DEFAULT_TEMPO_BPM, DEFAULT_BEAT_TOL_MS, DEFAULT_MIN_NOTE_ACC,
                    DEFAULT_MIN_METRONOME_ACC, VERDICT_NOT_STARTED)

class Hand(Enum):
    RIGHT = "right"
    LEFT = "left"

@dataclass(frozen=True)
class FingeredNote:
    midi_note: int
    finger: int    # 1 (thumb) .. 5
    hand: Hand

@dataclass(frozen=True)
class PracticeTask:
    name: str
    description: str = ""
    expected_notes: tuple[int, ...] = ()
    fingering_notes: tuple[FingeredNote, ...] = ()
    requires_midi_input: bool = True
    require_metronome: bool = False
    tempo_bpm: int = DEFAULT_TEMPO_BPM
    beat_tolerance_ms: int = DEFAULT_BEAT_TOL_MS
    min_note_accuracy: float = DEFAULT_MIN_NOTE_ACC
    min_metronome_accuracy: float = DEFAULT_MIN_METRONOME_ACC

    def __post_init__(self):
        # lists from callers / JSON are frozen into tuples
        object.__setattr__(self, "expected_notes", tuple(self.expected_notes))
        object.__setattr__(self, "fingering_notes", tuple(self.fingering_notes))
        if self.require_metronome and self.tempo_bpm <= 0:
            raise ValueError(f"{self.name}: tempo_bpm must be > 0 with a metronome, got {self.tempo_bpm}")
        if self.beat_tolerance_ms < 0:
            raise ValueError(f"{self.name}: beat_tolerance_ms must be >= 0, got {self.beat_tolerance_ms}")

@dataclass(frozen=True)
class PracticeResult:
    expected_notes: int = 0
    processed_notes: int = 0
    correct_notes: int = 0
    wrong_notes: int = 0
    metronome_on_beat: int = 0
    metronome_total: int = 0

    @property
    def is_complete(self) -> bool:
        return self.processed_notes >= self.expected_notes

    @property
    def note_accuracy(self) -> float:
        return self.correct_notes / self.expected_notes if self.expected_notes else 0.0

    @property
    def metronome_accuracy(self) -> float:
        return self.metronome_on_beat / self.metronome_total if self.metronome_total else 0.0

@dataclass(frozen=True)
class TaskProgress:
    times_completed: int = 0
    last_verdict: str = VERDICT_NOT_STARTED
    last_completed_utc: Optional[datetime] = field(default=None)

@dataclass(frozen=True)
class NoteEvent:
    note: int
    t_ms: int      # ms since session start

class NoteSink(Protocol):
    def post(self, note: int, t_ms: int) -> None: ...
