from dataclasses import dataclass
from typing import Optional, Sequence
from pp_types import FingeredNote, Hand
from keyboard import KeyboardLayout, compute_layout, is_accidental
from config import MARKER_Y, MARKER_RADIUS

@dataclass(frozen=True)
class FingerMarker:
    note: int
    center_x: float
    center_y: float
    hand: Hand
    label: str
    radius: float = MARKER_RADIUS

@dataclass(frozen=True)
class FingeringDiagram:
    layout: Optional[KeyboardLayout]
    markers: tuple[FingerMarker, ...] = ()

    @property
    def has_notes(self) -> bool:
        return self.layout is not None

def marker_y(note: int, hand: Hand, key_height: float) -> float:
    return key_height * MARKER_Y[(is_accidental(note), hand == Hand.RIGHT)]

def place_markers(layout: KeyboardLayout, fingerings: Sequence[FingeredNote]) -> list[FingerMarker]:
    markers = []
    for f in fingerings:
        # fingerings may reach past the drawn window
        if not layout.contains(f.midi_note):
            continue
        markers.append(FingerMarker(
            note=f.midi_note,
            center_x=layout.center_x(f.midi_note),
            center_y=marker_y(f.midi_note, f.hand, layout.white_key_height),
            hand=f.hand,
            label=str(f.finger),
        ))
    return markers

def layout_fingerings(fingerings: Sequence[FingeredNote], width: float, height: float) -> FingeringDiagram:
    layout = compute_layout((f.midi_note for f in fingerings), width, height)
    if layout is None:
        return FingeringDiagram(layout=None)
    return FingeringDiagram(layout=layout, markers=tuple(place_markers(layout, fingerings)))
