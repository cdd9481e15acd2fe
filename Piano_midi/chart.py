from typing import Optional
from mido import MidiFile
from pp_types import PracticeTask
from midi_time import estimate_bpm

def extract_notes(mid: MidiFile, channel: Optional[int] = None) -> list[int]:
    """Note-on pitches of all tracks, in playing order (ties keep track order)."""
    hits: list[tuple[int, int, int]] = []
    for track_no, track in enumerate(mid.tracks):
        abs_ticks = 0
        for msg in track:
            abs_ticks += msg.time
            if msg.is_meta:
                continue
            if channel is not None and getattr(msg, "channel", None) != channel:
                continue
            if msg.type == "note_on" and msg.velocity > 0:
                hits.append((abs_ticks, track_no, msg.note))
    hits.sort(key=lambda h: (h[0], h[1]))
    return [note for _, _, note in hits]

def task_from_midi(mid: MidiFile, name: str, channel: Optional[int] = None,
                   require_metronome: bool = False, **overrides) -> PracticeTask:
    bpm = round(estimate_bpm(mid))
    return PracticeTask(
        name=name,
        description=f"Play the notes of {name}.",
        expected_notes=extract_notes(mid, channel),
        require_metronome=require_metronome,
        tempo_bpm=bpm,
        **overrides,
    )
