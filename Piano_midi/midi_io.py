import queue
import threading
import time
from typing import Optional
import mido
from pp_types import NoteEvent, NoteSink
from config import NOTE_QUEUE_SIZE, POLL_S

class NoteChannel(NoteSink):
    """Bounded FIFO from the MIDI thread to the single thread that owns the session."""
    def __init__(self, maxsize: int = NOTE_QUEUE_SIZE):
        self._q: "queue.Queue[NoteEvent]" = queue.Queue(maxsize)

    def post(self, note: int, t_ms: int):
        # blocks the producer when full so no note is lost or reordered
        self._q.put(NoteEvent(note, t_ms))

    def get(self, timeout: Optional[float] = None) -> Optional[NoteEvent]:
        try:
            return self._q.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain(self) -> list[NoteEvent]:
        out = []
        while True:
            try:
                out.append(self._q.get_nowait())
            except queue.Empty:
                return out

def list_ports() -> tuple[list[str], list[str]]:
    return mido.get_input_names(), mido.get_output_names()

class MidiInputLoop:
    def __init__(self, input_name: str):
        self.input_name = input_name

    def run(self, start_at: float, sink: NoteSink, stop: threading.Event):
        # sink.post(note, ms since start_at), note-on with velocity > 0 only
        with mido.open_input(self.input_name) as port:
            print(f"Listening to: {self.input_name}  (press Ctrl-C to stop)")
            while not stop.is_set():
                for msg in port.iter_pending():
                    if msg.type == 'note_on' and msg.velocity > 0:
                        t_ms = int((time.monotonic() - start_at) * 1000)
                        sink.post(msg.note, t_ms)
                time.sleep(POLL_S)

    def start(self, start_at: float, sink: NoteSink, stop: threading.Event) -> threading.Thread:
        def worker():
            try:
                self.run(start_at, sink, stop)
            except (OSError, ImportError) as e:
                # ImportError: no port backend (python-rtmidi) installed
                print(f"[WARN] MIDI input '{self.input_name}' failed: {e}")
            finally:
                # the session must not wait on a dead input
                stop.set()

        t = threading.Thread(target=worker, daemon=True)
        t.start()
        return t
