from config import NOTE_NAMES

UNKNOWN = "Unknown"

def to_name(midi_note: int) -> str:
    """MIDI note -> sharp-spelled name with octave, e.g. 60 -> 'C4'."""
    if midi_note < 0 or midi_note > 127:
        return UNKNOWN
    octave = midi_note // 12 - 1
    return f"{NOTE_NAMES[midi_note % 12]}{octave}"

def names(notes) -> list[str]:
    return [to_name(n) for n in notes]
