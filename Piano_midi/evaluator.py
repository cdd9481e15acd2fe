from typing import Optional
from pp_types import PracticeTask, PracticeResult
from config import VERDICT_PASS, VERDICT_NEEDS_WORK

def beat_ms(tempo_bpm: int) -> int:
    return round(60000 / tempo_bpm)

def on_beat(t_ms: int, start_ms: int, index: int, tempo_bpm: int, tol_ms: int) -> bool:
    expected = start_ms + index * beat_ms(tempo_bpm)
    return abs(t_ms - expected) <= tol_ms

def verdict_for(task: PracticeTask, result: PracticeResult) -> str:
    note_pass = result.note_accuracy >= task.min_note_accuracy
    metronome_pass = (not task.require_metronome) or result.metronome_accuracy >= task.min_metronome_accuracy
    return VERDICT_PASS if note_pass and metronome_pass else VERDICT_NEEDS_WORK

class PracticeEvaluator:
    """
    Positional matcher for one practice session.

    Every processed note consumes one slot of the expected sequence, right or
    wrong; nothing is re-aligned. Notes after the last slot are dropped.
    Not thread-safe: feed it from a single consumer.
    """
    def __init__(self, task: PracticeTask):
        if task is None:
            raise TypeError("PracticeEvaluator needs a task")
        self.task = task
        self.started = False
        self._reset(0)

    def _reset(self, start_ms: int):
        self.start_ms = start_ms
        self.cursor = 0
        self.correct = 0
        self.wrong = 0
        self.beats_on = 0
        self.metronome_total = 0

    def start(self, start_ms: int = 0):
        self._reset(start_ms)
        self.started = True

    def expected_note(self) -> Optional[int]:
        notes = self.task.expected_notes
        return notes[self.cursor] if self.cursor < len(notes) else None

    def process_note(self, note: int, t_ms: int):
        if not self.started:
            raise RuntimeError("process_note() called before start()")
        expected = self.expected_note()
        if expected is None:
            return

        if note == expected:
            self.correct += 1
        else:
            self.wrong += 1

        if self.task.require_metronome:
            self.metronome_total += 1
            if on_beat(t_ms, self.start_ms, self.cursor, self.task.tempo_bpm, self.task.beat_tolerance_ms):
                self.beats_on += 1

        self.cursor += 1

    def get_result(self) -> PracticeResult:
        return PracticeResult(
            expected_notes=len(self.task.expected_notes),
            processed_notes=self.cursor,
            correct_notes=self.correct,
            wrong_notes=self.wrong,
            metronome_on_beat=self.beats_on,
            metronome_total=self.metronome_total,
        )
