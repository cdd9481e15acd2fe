#!/usr/bin/env python3
import argparse, signal, sys, threading, time
from dataclasses import replace
from mido import MidiFile
from config import PROGRESS_FILE
from catalog import default_plan, default_toc, find_task, load_catalog
from chart import task_from_midi
from fingering import layout_fingerings
from midi_io import MidiInputLoop, NoteChannel, list_ports
from note_names import names, to_name
from progress import ProgressStore
from scheduler import Metronome
from session import PracticeSession


START_DELAY_S = 2.0

def print_toc(plan, store: ProgressStore):
    for group in default_toc(plan):
        print(f"\n{group.title}")
        for item in group.items:
            prog = store.get(item.task.name)
            done = f"  [{prog.times_completed}x, {prog.last_verdict}]" if prog.times_completed else ""
            print(f"  - {item.title:32s} ({item.task.name}){done}")

def print_fingering(task, width=700.0, height=120.0):
    diagram = layout_fingerings(task.fingering_notes, width, height)
    if not diagram.has_notes:
        print("No fingering for this task.")
        return
    lay = diagram.layout
    print(f"Keys {to_name(lay.start_note)}..{to_name(lay.end_note)}: "
          f"{len(lay.white_notes)} white keys, {lay.white_key_width:.1f} x {lay.white_key_height:.1f}")
    for m in diagram.markers:
        print(f"  {to_name(m.note):4s} finger {m.label}  {m.hand.value:5s}  x={m.center_x:6.1f}  y={m.center_y:5.1f}")

def print_ports():
    inputs, outputs = list_ports()
    print("Available MIDI inputs:")
    for name in inputs: print("  -", name)
    print("\nAvailable MIDI outputs:")
    for name in outputs: print("  -", name)
    print("\nTip: re-run with --input 'Your Keyboard Port'")

def main(argv=None):
    ap = argparse.ArgumentParser(description="Piano practice: play a task on your MIDI keyboard and get scored.")
    ap.add_argument("task", nargs="?", help="Task name (see --list)")
    ap.add_argument("--list", action="store_true", help="List practice tasks and progress")
    ap.add_argument("--input", help="MIDI input name. If omitted, prints ports and exits.")
    ap.add_argument("--catalog", help="JSON file with task records (default: built-in plan)")
    ap.add_argument("--midi", help="Practice the notes of this MIDI file instead of a catalog task")
    ap.add_argument("--channel", type=int, help="Only take notes from this MIDI channel (0-15) with --midi")
    ap.add_argument("--metronome", action="store_true", help="Grade timing against the tempo of --midi")
    ap.add_argument("--tol", type=int, help="Beat tolerance in ms (overrides the task)")
    ap.add_argument("--progress", default=PROGRESS_FILE, help=f"Progress file (default {PROGRESS_FILE})")
    ap.add_argument("--fingering", action="store_true", help="Print finger placement for the task and exit")
    ap.add_argument("--complete", action="store_true", help="Mark a lesson without MIDI input as completed")
    ap.add_argument("--no-click", action="store_true", help="Disable the metronome click")
    args = ap.parse_args(argv)

    try:
        plan = load_catalog(args.catalog) if args.catalog else default_plan()
    except (OSError, ValueError) as e:
        print(f"Could not load catalog: {e}")
        return 1
    store = ProgressStore(args.progress)

    if args.list:
        print_toc(plan, store)
        return 0

    if args.midi:
        overrides = {} if args.tol is None else {"beat_tolerance_ms": args.tol}
        task = task_from_midi(MidiFile(args.midi), name=args.task or args.midi, channel=args.channel,
                              require_metronome=args.metronome, **overrides)
        if not task.expected_notes:
            print("No notes found in this MIDI.")
            return 1
    elif args.task:
        try:
            task = find_task(plan, args.task)
        except KeyError:
            print(f"Unknown task '{args.task}'. Use --list to see the tasks.")
            return 1
        if args.tol is not None:
            task = replace(task, beat_tolerance_ms=args.tol)
    else:
        ap.print_help()
        return 1

    print(f"{task.name}\n  {task.description}")
    if task.expected_notes:
        print("  Notes: " + " ".join(names(task.expected_notes)))

    if args.fingering:
        print_fingering(task)
        return 0

    session = PracticeSession(store)
    session.select(task)

    if not task.requires_midi_input:
        session.start()
        if args.complete:
            session.complete_lesson()
        print("\n".join(session.status_lines()))
        return 0

    if not args.input:
        print_ports()
        return 0

    stop = threading.Event()
    signal.signal(signal.SIGINT, lambda signum, frame: stop.set())
    channel = NoteChannel()
    start_at = time.monotonic() + START_DELAY_S

    metronome = None
    if task.require_metronome and not args.no_click:
        try:
            metronome = Metronome(task.tempo_bpm)
            metronome.start(start_at, len(task.expected_notes))
        except ImportError as e:
            print(f"[WARN] No audio for the click ({e}). Install the 'audio' extra.")
            metronome = None

    session.start()
    MidiInputLoop(args.input).start(start_at, channel, stop)
    print(f"Starting in {START_DELAY_S:.0f}s, first note on the first click.")

    try:
        session.consume(channel, stop)
    finally:
        stop.set()
        session.stop()
        if metronome:
            metronome.stop(); metronome.join()

        print("\n----- Results -----")
        for line in session.status_lines():
            print(line)
        if session.verdict:
            print(f"Verdict: {session.verdict}")

    return 0

if __name__ == "__main__":
    sys.exit(main())
