from dataclasses import dataclass
from typing import Iterable, Optional
from config import (ACCIDENTAL_CLASSES, MAX_WHITE_KEY_HEIGHT,
                    BLACK_KEY_WIDTH_RATIO, BLACK_KEY_HEIGHT_RATIO)

def is_accidental(note: int) -> bool:
    return note % 12 in ACCIDENTAL_CLASSES

def keyboard_range(notes: Iterable[int]) -> Optional[tuple[int, int]]:
    """Widen the notes out to whole octaves: lowest C .. highest B."""
    notes = list(notes)
    if not notes:
        return None
    lo, hi = min(notes), max(notes)
    return lo - (lo % 12), hi + (11 - hi % 12)

def white_key_notes(start: int, end: int) -> list[int]:
    return [n for n in range(start, end + 1) if not is_accidental(n)]

@dataclass(frozen=True)
class KeyRect:
    note: int
    x: float
    y: float
    width: float
    height: float

@dataclass(frozen=True)
class KeyboardLayout:
    start_note: int
    end_note: int
    white_notes: tuple[int, ...]
    white_key_width: float
    white_key_height: float

    @property
    def black_key_width(self) -> float:
        return self.white_key_width * BLACK_KEY_WIDTH_RATIO

    @property
    def black_key_height(self) -> float:
        return self.white_key_height * BLACK_KEY_HEIGHT_RATIO

    def contains(self, note: int) -> bool:
        return self.start_note <= note <= self.end_note

    def white_index(self, note: int) -> int:
        return self.white_notes.index(note)

    def center_x(self, note: int) -> float:
        """
        Naturals: middle of the white key.
        Accidentals: right edge of the nearest white key below, i.e. where the
        black key sits between its two neighbours.
        """
        w = self.white_key_width
        if not is_accidental(note):
            return self.white_index(note) * w + w / 2
        prev = note - 1
        while prev >= 0 and is_accidental(prev):
            prev -= 1
        return self.white_index(prev) * w + w

    def white_keys(self) -> list[KeyRect]:
        w, h = self.white_key_width, self.white_key_height
        return [KeyRect(n, i * w, 0.0, w, h) for i, n in enumerate(self.white_notes)]

    def black_keys(self) -> list[KeyRect]:
        w = self.white_key_width
        bw, bh = self.black_key_width, self.black_key_height
        keys = []
        for i, white in enumerate(self.white_notes):
            black = white + 1
            if black > self.end_note or not is_accidental(black):
                continue
            keys.append(KeyRect(black, i * w + w - bw / 2, 0.0, bw, bh))
        return keys

def compute_layout(notes: Iterable[int], width: float, height: float) -> Optional[KeyboardLayout]:
    """Layout covering `notes` in a width x height box, None when there is nothing to draw."""
    rng = keyboard_range(notes)
    if rng is None:
        return None
    start, end = rng
    whites = white_key_notes(start, end)
    if not whites:
        return None
    return KeyboardLayout(
        start_note=start,
        end_note=end,
        white_notes=tuple(whites),
        white_key_width=width / len(whites),
        white_key_height=min(MAX_WHITE_KEY_HEIGHT, height),
    )
