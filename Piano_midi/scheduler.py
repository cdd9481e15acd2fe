import time, threading
from evaluator import beat_ms

def beat_times(bpm: int, count: int, start_time: float) -> list[float]:
    """Click times in seconds, on the same beat grid the evaluator grades against."""
    sec_per_beat = beat_ms(bpm) / 1000.0
    return [start_time + i * sec_per_beat for i in range(count)]

class Metronome:
    def __init__(self, bpm: int, beats_per_bar: int = 4):
        self.bpm = bpm
        self.beats_per_bar = beats_per_bar
        self._stop = threading.Event()
        self._thread: threading.Thread|None = None

    def stop(self):
        self._stop.set()

    def start(self, start_at: float, beats: int):
        # imported here so the rest of the app runs without an audio device
        from audio import ClickSounds
        sounds = ClickSounds()

        events = beat_times(self.bpm, beats, start_at)

        def worker():
            for i, t in enumerate(events):
                delay = t - time.monotonic()
                if delay > 0 and self._stop.wait(delay):
                    break
                if self._stop.is_set():
                    break
                try:
                    sounds.play(accent=(i % self.beats_per_bar == 0))
                except Exception as e:
                    print(f"[WARN] Click playback failed: {e}")
                    break

        self._thread = threading.Thread(target=worker, daemon=True)
        self._thread.start()

    def join(self, timeout=None):
        if self._thread:
            self._thread.join(timeout)
