import pytest
from mido import MidiFile, MidiTrack, MetaMessage, Message
from pp_types import FingeredNote, Hand, PracticeTask
from progress import ProgressStore


@pytest.fixture
def simple_melody_midi(tmp_path):
    """
    Creates a tiny two-track MIDI at 100 BPM: melody on channel 0, a bass note
    on channel 1 that lands between the melody notes.
    Returns path to file and the expected playing order of all note-ons.
    """
    path = tmp_path / "melody.mid"
    mid = MidiFile(ticks_per_beat=480)

    melody = MidiTrack()
    bass = MidiTrack()
    mid.tracks.append(melody)
    mid.tracks.append(bass)

    melody.append(MetaMessage('set_tempo', tempo=600000, time=0))  # 100 BPM

    def beats_to_ticks(b): return int(b * mid.ticks_per_beat)

    last_ticks = 0
    for b, note in [(0.0, 60), (1.0, 62), (2.0, 64)]:
        t = beats_to_ticks(b)
        melody.append(Message('note_on', channel=0, note=note, velocity=90, time=t - last_ticks))
        melody.append(Message('note_off', channel=0, note=note, velocity=0, time=10))
        last_ticks = t + 10

    # note_on with velocity 0 is a note-off and must not count
    bass.append(Message('note_on', channel=1, note=48, velocity=80, time=beats_to_ticks(1.5)))
    bass.append(Message('note_on', channel=1, note=48, velocity=0, time=20))

    mid.save(str(path))
    return str(path), [60, 62, 48, 64]


@pytest.fixture
def c_scale_task():
    return PracticeTask(
        name="Scales: C major (test)",
        expected_notes=[60, 62, 64, 65, 67, 69, 71, 72],
        fingering_notes=[FingeredNote(60, 1, Hand.RIGHT), FingeredNote(61, 2, Hand.LEFT)],
        min_note_accuracy=0.95,
    )


@pytest.fixture
def metronome_task():
    return PracticeTask(
        name="Rhythm: test @ 60 bpm",
        expected_notes=[60, 60, 60, 60],
        require_metronome=True,
        tempo_bpm=60,
        beat_tolerance_ms=120,
        min_note_accuracy=1.0,
        min_metronome_accuracy=0.75,
    )


@pytest.fixture
def store(tmp_path):
    return ProgressStore(tmp_path / "progress.json")
