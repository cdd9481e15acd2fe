from mido import MidiFile, tempo2bpm
from config import DEFAULT_TEMPO_USPQN

def tempo_changes(mid: MidiFile) -> list[tuple[int, int]]:
    """(abs_tick, us per quarter) for every set_tempo in any track, earliest first."""
    changes = []
    for track in mid.tracks:
        abs_ticks = 0
        for msg in track:
            abs_ticks += msg.time
            if msg.type == "set_tempo":
                changes.append((abs_ticks, msg.tempo))
    changes.sort(key=lambda c: c[0])
    return changes

def opening_tempo(mid: MidiFile) -> int:
    """Tempo in force at tick 0; the MIDI default when the file sets none there."""
    changes = tempo_changes(mid)
    if changes and changes[0][0] == 0:
        # several tempo events at tick 0: the last one wins
        return [us for tick, us in changes if tick == 0][-1]
    return DEFAULT_TEMPO_USPQN

def estimate_bpm(mid: MidiFile) -> float:
    return tempo2bpm(opening_tempo(mid))
