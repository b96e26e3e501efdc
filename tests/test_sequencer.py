import asyncio

import numpy as np
import pytest

from soundtype.music import DEFAULT_CATALOG, LiveScheduler, buffer_duration, layout, total_duration
from soundtype.music.sequencer import NOTE_INTERVAL, TAIL_PADDING


def test_layout_ab(piano):
    notes = layout("ab", piano)
    assert [n.character for n in notes] == ["a", "b"]
    assert [n.start for n in notes] == pytest.approx([0.0, 0.2])
    assert notes[0].frequency == pytest.approx(283.4325)
    assert notes[1].frequency == pytest.approx(305.235)


def test_layout_is_idempotent():
    bass = DEFAULT_CATALOG.get("bass")
    assert layout("Hello, world", bass) == layout("Hello, world", bass)


def test_layout_uses_index_times_interval(piano):
    notes = layout("abcdefghij", piano, interval=0.25)
    assert [n.start for n in notes] == [i * 0.25 for i in range(10)]


def test_empty_text(piano):
    assert layout("", piano) == []
    assert total_duration("", piano) == 0.0
    assert buffer_duration("", piano) == 0.0


def test_durations(piano):
    assert total_duration("ab", piano) == pytest.approx(2 * NOTE_INTERVAL + 0.51)
    assert buffer_duration("ab", piano) == pytest.approx(total_duration("ab", piano) + TAIL_PADDING)


def test_fire_due_plays_notes_on_time(piano, make_output):
    output = make_output()
    scheduler = LiveScheduler(output)
    assert scheduler.schedule(layout("abc", piano), piano, now=100.0) == 3
    assert scheduler.pending == 3

    assert scheduler.fire_due(now=100.0) == 1
    assert scheduler.fire_due(now=100.1) == 0
    assert scheduler.fire_due(now=100.25) == 1
    assert scheduler.fire_due(now=105.0) == 1
    assert not scheduler.is_playing

    samples, sample_rate = output.played[0]
    assert sample_rate == 44100
    assert len(samples) == round(0.51 * 44100)


def test_events_fire_in_time_order(piano, make_output):
    output = make_output()
    scheduler = LiveScheduler(output)
    scheduler.schedule(layout("b", piano), piano, now=10.0)
    scheduler.schedule(layout("a", piano), piano, now=5.0)
    assert scheduler.next_fire_time() == 5.0
    scheduler.fire_due(now=20.0)
    first, second = (samples for samples, _ in output.played)
    a_only = LiveScheduler(make_output())
    a_only.schedule(layout("a", piano), piano, now=0.0)
    a_only.fire_due(now=0.0)
    assert np.array_equal(first, a_only.output.played[0][0])
    assert not np.array_equal(first, second)


def test_cancel_keeps_started_notes(piano, make_output):
    output = make_output()
    scheduler = LiveScheduler(output)
    scheduler.schedule(layout("abcd", piano), piano, now=0.0)
    scheduler.fire_due(now=0.0)
    assert scheduler.cancel() == 3
    assert scheduler.fire_due(now=10.0) == 0
    assert len(output.played) == 1


def test_run_drains_queue(piano, make_output):
    output = make_output()
    scheduler = LiveScheduler(output)
    scheduler.schedule(layout("abc", piano, interval=0.01), piano)
    asyncio.run(scheduler.run())
    assert len(output.played) == 3
    assert scheduler.pending == 0


def test_cancel_wakes_running_scheduler(piano, make_output):
    output = make_output()
    scheduler = LiveScheduler(output)

    async def scenario():
        scheduler.schedule(layout("abc", piano, interval=30.0), piano)
        task = asyncio.create_task(scheduler.run())
        await asyncio.sleep(0.05)
        dropped = scheduler.cancel()
        await asyncio.wait_for(task, timeout=1.0)
        return dropped

    assert asyncio.run(scenario()) == 2
    assert len(output.played) == 1
