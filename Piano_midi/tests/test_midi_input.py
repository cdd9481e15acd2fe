import threading
import mido
from mido import Message
from midi_io import MidiInputLoop, NoteChannel


class FakePort:
    """Stands in for a mido input port: hands out its messages once, then stops the loop."""
    def __init__(self, messages, stop):
        self.messages = messages
        self.stop = stop

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def iter_pending(self):
        msgs, self.messages = self.messages, []
        yield from msgs
        self.stop.set()


def test_only_sounding_note_ons_reach_the_channel(monkeypatch):
    stop = threading.Event()
    msgs = [
        Message('note_on', note=60, velocity=0),
        Message('note_off', note=62, velocity=40),
        Message('control_change', control=64, value=127),
        Message('note_on', note=64, velocity=90),
    ]
    monkeypatch.setattr(mido, "open_input", lambda name: FakePort(msgs, stop))
    channel = NoteChannel()

    MidiInputLoop("Keyboard").run(start_at=0.0, sink=channel, stop=stop)

    events = channel.drain()
    assert [e.note for e in events] == [64]
    assert events[0].t_ms >= 0


def test_missing_port_backend_releases_the_session(monkeypatch, capsys):
    def no_backend(name):
        raise ModuleNotFoundError("No module named 'rtmidi'")
    monkeypatch.setattr(mido, "open_input", no_backend)
    stop = threading.Event()

    t = MidiInputLoop("Keyboard").start(0.0, NoteChannel(), stop)
    t.join(1)

    assert not t.is_alive()
    assert stop.is_set()
    assert "[WARN]" in capsys.readouterr().out


def test_unknown_port_releases_the_session(monkeypatch):
    def unknown(name):
        raise OSError(f"unknown port {name!r}")
    monkeypatch.setattr(mido, "open_input", unknown)
    stop = threading.Event()

    t = MidiInputLoop("Nope").start(0.0, NoteChannel(), stop)
    t.join(1)

    assert stop.is_set()
