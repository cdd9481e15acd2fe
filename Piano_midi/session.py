import threading
from typing import Callable, Optional
from pp_types import NoteEvent, PracticeResult, PracticeTask
from evaluator import PracticeEvaluator, verdict_for
from midi_io import NoteChannel
from note_names import to_name
from progress import ProgressStore
from config import VERDICT_COMPLETED

class PracticeSession:
    """
    Drives one practice task at a time: owns the evaluator, turns note events
    into feedback lines and records the verdict in the progress store once the
    task is finished.

    All methods must be called from the thread that drains the note channel.
    """
    def __init__(self, store: ProgressStore):
        self.store = store
        self.task: Optional[PracticeTask] = None
        self.evaluator: Optional[PracticeEvaluator] = None
        self.running = False
        self.verdict: Optional[str] = None
        self.status = "No task running"
        self.last_note = "Last note: --"

    def select(self, task: PracticeTask):
        # a new task discards whatever session was going on
        self.task = task
        self.reset()

    def start(self):
        if self.task is None:
            raise RuntimeError("start() without a selected task")
        task = self.task
        if task.requires_midi_input and task.expected_notes:
            self.evaluator = PracticeEvaluator(task)
            self.evaluator.start(0)
        else:
            self.evaluator = None
        self.running = True
        self.verdict = None
        self.status = f"Running: {task.name}"
        self.last_note = "Last note: --"

    def result(self) -> Optional[PracticeResult]:
        return self.evaluator.get_result() if self.evaluator else None

    def handle_note(self, event: NoteEvent) -> str:
        name = to_name(event.note)
        if not self.running or self.evaluator is None:
            self.last_note = f"Last note: {name} (ignored)"
            return self.last_note

        expected = self.evaluator.expected_note()
        self.evaluator.process_note(event.note, event.t_ms)
        if expected is None:
            self.last_note = f"Last note: {name}"
        elif expected == event.note:
            self.last_note = f"Last note: {name} (correct)"
        else:
            self.last_note = f"Last note: {name} (expected {to_name(expected)})"

        result = self.evaluator.get_result()
        if result.is_complete:
            self._finish(result)
        return self.last_note

    def _finish(self, result: PracticeResult):
        self.running = False
        self.verdict = verdict_for(self.task, result)
        self.status = f"Completed: {self.task.name} ({self.verdict})"
        self.store.record(self.task.name, self.verdict)

    def stop(self):
        if not self.running:
            return
        self.running = False
        if self.task is not None:
            self.status = f"Stopped: {self.task.name}"

    def reset(self):
        self.evaluator = None
        self.running = False
        self.verdict = None
        self.status = "No task running"
        self.last_note = "Last note: --"

    def complete_lesson(self) -> bool:
        """Mark a lesson without MIDI input as done; MIDI tasks finish on their own."""
        if not self.running or self.task is None or self.task.requires_midi_input:
            return False
        self.running = False
        self.verdict = VERDICT_COMPLETED
        self.status = f"Completed: {self.task.name} ({VERDICT_COMPLETED})"
        self.store.record(self.task.name, VERDICT_COMPLETED)
        return True

    def status_lines(self) -> list[str]:
        task = self.task
        if task is None:
            return [self.status]
        result = self.result()
        if result is None:
            metro = (f"Metronome: required at {task.tempo_bpm} bpm" if task.require_metronome
                     else "Metronome: not required")
            return [self.status, "Progress: lesson (no MIDI)", "Accuracy: --", metro]

        lines = [
            self.status,
            f"Progress: {result.processed_notes} / {result.expected_notes}",
            f"Accuracy: {result.note_accuracy:.1%} (target {task.min_note_accuracy:.0%})",
        ]
        if task.require_metronome:
            lines.append(f"Metronome: {result.metronome_on_beat} / {result.metronome_total} on-beat "
                         f"(target {task.min_metronome_accuracy:.0%})")
        else:
            lines.append("Metronome: not required")
        return lines

    def consume(self, channel: NoteChannel, stop: threading.Event,
                on_line: Callable[[str], None] = print, poll_s: float = 0.05):
        """Feed queued notes into the session until it finishes or `stop` is set."""
        while self.running and not stop.is_set():
            event = channel.get(timeout=poll_s)
            if event is None:
                continue
            on_line(self.handle_note(event))
