import json
import pytest
from catalog import PLAN, default_plan, default_toc, find_task, load_catalog, task_from_record
from pp_types import Hand, PracticeTask

def test_default_plan_covers_all_tasks():
    plan = default_plan()
    assert len(plan) == len(PLAN) == 41
    names = [t.name for t in plan]
    assert len(set(names)) == len(names)
    assert names[0] == "Warmup: 5-finger C position"

def test_scale_rows_expand_to_fingerings():
    task = find_task(default_plan(), "Scales: F# major (RH)")
    assert task.expected_notes == (66, 68, 70, 71, 73, 75, 77, 78)
    assert [f.finger for f in task.fingering_notes] == [2, 3, 4, 1, 2, 3, 4, 1]
    assert all(f.hand == Hand.RIGHT for f in task.fingering_notes)
    assert task.description.endswith("Fingering: 2-3-4-1-2-3-4-1.")

def test_lessons_without_midi():
    task = find_task(default_plan(), "rhythm: quarter notes @ 70 bpm")
    assert not task.requires_midi_input
    assert task.require_metronome
    assert (task.tempo_bpm, task.beat_tolerance_ms) == (70, 120)
    assert task.expected_notes == ()

def test_every_task_keeps_the_invariants():
    for task in default_plan():
        assert task.beat_tolerance_ms >= 0
        if task.require_metronome:
            assert task.tempo_bpm > 0
        for f in task.fingering_notes:
            assert 1 <= f.finger <= 5
            assert 0 <= f.midi_note <= 127

def test_unknown_task():
    with pytest.raises(KeyError):
        find_task(default_plan(), "Scales: H major")

def test_toc_groups_in_order():
    toc = default_toc(default_plan())
    assert [g.title for g in toc] == ["Warmup", "Scales", "Rhythm & Metronome", "Chords & Progressions",
                                      "Reading", "Repertoire", "Ear Training"]
    scales = toc[1]
    assert scales.items[0].title == "C major (hands together)"
    assert len(scales.items) == 27
    ear = toc[-1]
    assert ear.items[0].title == "Intervals: 2nds & 3rds"
    assert ear.items[5].title == "Scale degrees"
    assert toc[2].items[0].title == "Quarter notes @ 70 bpm"

def test_load_catalog_from_json(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps([
        {"name": "Mine: thirds", "notes": [60, 64], "fingering": [[60, 1, "right"], [64, 3, "left"]],
         "metronome": True, "bpm": 90, "tol_ms": 80},
    ]))
    (task,) = load_catalog(path)
    assert task.expected_notes == (60, 64)
    assert task.fingering_notes[1].hand == Hand.LEFT
    assert (task.tempo_bpm, task.beat_tolerance_ms) == (90, 80)
    toc = default_toc([task], records=[])
    assert toc[0].title == "Other"
    assert toc[0].items[0].title == "Thirds"

def test_bad_catalogs(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        load_catalog(path)
    path.write_text(json.dumps({"name": "x"}))
    with pytest.raises(ValueError):
        load_catalog(path)
    with pytest.raises(ValueError):
        task_from_record({"description": "no name"})
    with pytest.raises(ValueError):
        task_from_record({"name": "x", "fingering": [[60, 1, "middle"]]})

def test_task_validation():
    with pytest.raises(ValueError):
        PracticeTask(name="x", require_metronome=True, tempo_bpm=0)
    with pytest.raises(ValueError):
        PracticeTask(name="x", beat_tolerance_ms=-1)
    # tempo only matters with a metronome
    assert PracticeTask(name="x", tempo_bpm=0).tempo_bpm == 0
