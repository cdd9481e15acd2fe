import numpy as np
import simpleaudio as sa
from config import SR, MASTER_GAIN, CLICK_HZ, CLICK_MS

def click_pcm(freq: float = CLICK_HZ, duration_ms: int = CLICK_MS, level: float = 0.6) -> np.ndarray:
    """Stereo int16 click: sine with a linear fade-out."""
    n = int(SR * duration_ms / 1000)
    t = np.arange(n) / SR
    mono = np.sin(2 * np.pi * freq * t) * np.linspace(1.0, 0.0, n) * level * MASTER_GAIN
    return (np.repeat(mono[:, None], 2, axis=1) * 32767).astype(np.int16)

class ClickSounds:
    """Ready-made wave objects for the metronome; the bar's first beat sounds an octave up."""
    def __init__(self, freq: float = CLICK_HZ):
        self.beat = sa.WaveObject(click_pcm(freq).tobytes(), 2, 2, SR)
        self.downbeat = sa.WaveObject(click_pcm(freq * 2, level=0.8).tobytes(), 2, 2, SR)

    def play(self, accent: bool = False):
        return (self.downbeat if accent else self.beat).play()
