"""Tests for the FlowState timer engine.

Covers: start/pause/reset state machine, countdown and completion
ordering, listener registration and failure isolation, task names,
formatting helpers, and the Qt tick source.
"""

import logging
import random

import pytest

from flowstate.timer.engine import (
    TimerEngine, TimerSnapshot, CompletionEvent,
    DEFAULT_DURATION, COMPLETION_TITLE, PLACEHOLDER_TASK,
    format_time, completion_message,
)
from flowstate.timer.ticker import QtTickSource

from helpers import SignalCollector, run_to_zero


# ═══════════════════════════════════════════════════════════════════════════
#  STATE MACHINE
# ═══════════════════════════════════════════════════════════════════════════


class TestStateTransitions:

    def test_initial_state(self, engine):
        assert engine.remaining == DEFAULT_DURATION == 1500
        assert engine.is_running is False
        assert engine.task_name == ""
        assert engine.display_text == "25:00"

    def test_duration_is_fixed(self, ticks):
        with pytest.raises(TypeError):
            TimerEngine(ticks, duration=60)
        assert not hasattr(TimerEngine(ticks), "duration")

    def test_start_runs_tick_source(self, engine, ticks):
        engine.start()
        assert engine.is_running is True
        assert ticks.is_active

    def test_start_is_idempotent(self, engine, ticks):
        engine.start()
        before = engine.snapshot()
        engine.start()
        assert engine.snapshot() == before
        assert ticks.start_calls == 1

    def test_pause_stops_tick_source(self, engine, ticks):
        engine.start()
        engine.pause()
        assert engine.is_running is False
        assert not ticks.is_active

    def test_pause_is_idempotent(self, engine, ticks):
        engine.start()
        engine.pause()
        engine.pause()
        assert ticks.stop_calls == 1

    def test_pause_when_idle_is_noop(self, engine, ticks):
        engine.pause()
        assert engine.is_running is False
        assert ticks.stop_calls == 0

    def test_resume_continues_from_paused_time(self, engine, ticks):
        engine.start()
        ticks.advance(5)
        engine.pause()
        engine.start()
        ticks.advance(5)
        assert engine.remaining == 1490

    def test_reset_while_running(self, engine, ticks):
        engine.start()
        ticks.advance(30)
        engine.reset()
        assert engine.is_running is False
        assert engine.remaining == 1500
        assert not ticks.is_active

    def test_reset_while_paused(self, engine, ticks):
        engine.start()
        ticks.advance(3)
        engine.pause()
        engine.reset()
        assert engine.remaining == 1500

    def test_reset_when_idle_is_idempotent(self, engine):
        c = SignalCollector()
        engine.add_state_listener(c)
        engine.reset()
        engine.reset()
        assert engine.remaining == 1500
        assert engine.is_running is False
        assert len(c) == 0

    def test_operations_never_raise(self, engine):
        for op in (engine.pause, engine.reset, engine.start, engine.start,
                   engine.reset, engine.pause, engine.tick):
            op()


# ═══════════════════════════════════════════════════════════════════════════
#  COUNTDOWN
# ═══════════════════════════════════════════════════════════════════════════


class TestCountdown:

    def test_tick_decrements(self, engine, ticks):
        engine.start()
        ticks.advance()
        assert engine.remaining == 1499
        assert engine.display_text == "24:59"

    def test_start_tick_pause_scenario(self, engine, ticks):
        engine.start()
        ticks.advance()
        engine.pause()
        assert engine.remaining == 1499
        assert engine.is_running is False
        assert not ticks.is_active

        # Simulated time passing after cancellation changes nothing.
        ticks.advance(100)
        engine.tick()
        assert engine.remaining == 1499

    def test_tick_ignored_when_not_running(self, engine):
        engine.tick()
        assert engine.remaining == 1500

    def test_remaining_reaches_zero_before_completion(self, engine, ticks):
        done = SignalCollector()
        engine.add_completion_listener(done)
        engine.start()
        ticks.advance(1500)
        assert engine.remaining == 0
        assert engine.display_text == "00:00"
        assert engine.is_running is True
        assert len(done) == 0

    def test_full_countdown_completes_once(self, engine, ticks):
        done = SignalCollector()
        engine.add_completion_listener(done)
        engine.start()
        ticks.advance(1501)
        assert len(done) == 1
        assert engine.remaining == 1500
        assert engine.is_running is False
        assert not ticks.is_active

    def test_no_further_ticks_after_completion(self, engine, ticks):
        done = SignalCollector()
        engine.add_completion_listener(done)
        engine.start()
        ticks.advance(3000)
        assert len(done) == 1
        assert engine.remaining == 1500

    def test_completion_sees_zero_then_resets(self, engine, ticks):
        seen = []
        engine.add_completion_listener(
            lambda event: seen.append((engine.display_text, engine.is_running))
        )
        engine.start()
        run_to_zero(engine)
        ticks.advance()
        assert seen == [("00:00", False)]
        assert engine.display_text == "25:00"

    def test_state_sequence_around_completion(self, engine, ticks):
        states = SignalCollector()
        engine.add_state_listener(states)
        engine.start()
        run_to_zero(engine)
        ticks.advance()
        assert states.items[-3:] == [
            (True, "00:00"),
            (False, "00:00"),
            (False, "25:00"),
        ]

    def test_pause_from_inside_tick_listener(self, engine, ticks):
        def on_state(is_running, text):
            if is_running and text == "24:58":
                engine.pause()

        engine.add_state_listener(on_state)
        engine.start()
        ticks.advance(10)
        assert engine.remaining == 1498
        assert engine.is_running is False
        assert not ticks.is_active

    def test_restart_after_completion(self, engine, ticks):
        engine.start()
        ticks.advance(1501)
        engine.start()
        ticks.advance(2)
        assert engine.remaining == 1498

    def test_remaining_stays_in_bounds(self, engine, ticks):
        rng = random.Random(1234)
        ops = [engine.start, engine.pause, engine.reset,
               lambda: ticks.advance(rng.randint(1, 700))]
        for _ in range(500):
            rng.choice(ops)()
            assert 0 <= engine.remaining <= DEFAULT_DURATION
            assert engine.is_running == ticks.is_active


# ═══════════════════════════════════════════════════════════════════════════
#  LISTENERS
# ═══════════════════════════════════════════════════════════════════════════


class TestListeners:

    def test_state_listener_receives_running_and_text(self, engine, ticks):
        c = SignalCollector()
        engine.add_state_listener(c)
        engine.start()
        assert c.last == (True, "25:00")
        ticks.advance()
        assert c.last == (True, "24:59")
        engine.pause()
        assert c.last == (False, "24:59")
        engine.reset()
        assert c.last == (False, "25:00")

    def test_unsubscribe(self, engine):
        c = SignalCollector()
        unsubscribe = engine.add_state_listener(c)
        unsubscribe()
        unsubscribe()  # second call is harmless
        engine.start()
        assert len(c) == 0

    def test_completion_event_contents(self, engine, ticks):
        done = SignalCollector()
        engine.add_completion_listener(done)
        engine.set_task_name("  Write report ")
        engine.start()
        run_to_zero(engine)
        ticks.advance()
        event = done.last
        assert isinstance(event, CompletionEvent)
        assert event.task_name == "  Write report "
        assert event.title == COMPLETION_TITLE
        assert event.message == "'Write report' is complete. Time for a break!"

    def test_failing_listener_does_not_affect_engine(self, engine, ticks, caplog):
        def broken(event):
            raise RuntimeError("notification denied")

        later = SignalCollector()
        engine.add_completion_listener(broken)
        engine.add_completion_listener(later)
        engine.start()
        run_to_zero(engine)
        with caplog.at_level(logging.ERROR, logger="flowstate.timer.engine"):
            ticks.advance()
        assert len(later) == 1
        assert engine.remaining == 1500
        assert engine.is_running is False
        assert "failed" in caplog.text

    def test_failing_state_listener_still_ticks(self, engine, ticks):
        def broken(is_running, text):
            raise ValueError("render error")

        engine.add_state_listener(broken)
        engine.start()
        ticks.advance(3)
        assert engine.remaining == 1497


# ═══════════════════════════════════════════════════════════════════════════
#  TASK NAME
# ═══════════════════════════════════════════════════════════════════════════


class TestTaskName:

    def test_set_task_name_notifies(self, engine):
        c = SignalCollector()
        engine.add_task_listener(c)
        engine.set_task_name("Inbox zero")
        assert engine.task_name == "Inbox zero"
        assert c.last == "Inbox zero"

    def test_same_name_not_renotified(self, engine):
        c = SignalCollector()
        engine.add_task_listener(c)
        engine.set_task_name("a")
        engine.set_task_name("a")
        assert len(c) == 1

    def test_rename_while_running_keeps_running(self, engine, ticks):
        engine.start()
        ticks.advance(2)
        engine.set_task_name("Review PR")
        assert engine.is_running is True
        assert engine.remaining == 1498
        assert ticks.is_active

    def test_no_validation(self, engine):
        engine.set_task_name("")
        engine.set_task_name("x" * 1000)
        assert len(engine.task_name) == 1000

    def test_completion_uses_latest_name(self, engine, ticks):
        done = SignalCollector()
        engine.add_completion_listener(done)
        engine.set_task_name("first")
        engine.start()
        run_to_zero(engine)
        engine.set_task_name("second")
        ticks.advance()
        assert done.last.message == "'second' is complete. Time for a break!"


# ═══════════════════════════════════════════════════════════════════════════
#  FORMATTING
# ═══════════════════════════════════════════════════════════════════════════


class TestFormatting:

    @pytest.mark.parametrize("seconds, expected", [
        (1500, "25:00"),
        (59, "00:59"),
        (0, "00:00"),
        (65, "01:05"),
        (600, "10:00"),
    ])
    def test_format_time(self, seconds, expected):
        assert format_time(seconds) == expected

    def test_snapshot_display_text_is_derived(self):
        snap = TimerSnapshot(task_name="", remaining=61, is_running=False)
        assert snap.display_text == "01:01"

    def test_empty_task_message(self):
        assert completion_message("") == "Your task is complete. Time for a break!"

    def test_named_task_message(self):
        assert (
            completion_message("Write report")
            == "'Write report' is complete. Time for a break!"
        )

    def test_completion_event_fields(self):
        event = CompletionEvent(task_name="x", message=completion_message("x"))
        assert event.title == COMPLETION_TITLE
        assert not hasattr(event, "completed_at")

    def test_whitespace_task_is_empty(self):
        assert completion_message("   ").startswith(PLACEHOLDER_TASK)
        assert completion_message("\t\n ") == completion_message("")


# ═══════════════════════════════════════════════════════════════════════════
#  QT TICK SOURCE
# ═══════════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestQtTickSource:

    def test_interval_is_one_second(self):
        assert QtTickSource().interval == 1000

    def test_start_and_stop(self):
        src = QtTickSource()
        calls = []
        src.start(lambda: calls.append(1))
        assert src.is_active
        src._on_timeout()
        assert calls == [1]
        src.stop()
        assert not src.is_active

    def test_timeout_after_stop_is_dropped(self):
        src = QtTickSource()
        calls = []
        src.start(lambda: calls.append(1))
        src.stop()
        src._on_timeout()
        assert calls == []

    def test_second_start_keeps_first_callback(self):
        src = QtTickSource()
        calls = []
        src.start(lambda: calls.append("a"))
        src.start(lambda: calls.append("b"))
        src._on_timeout()
        assert calls == ["a"]
        src.stop()

    def test_drives_engine(self):
        src = QtTickSource()
        eng = TimerEngine(src)
        eng.start()
        src._on_timeout()
        eng.pause()
        src._on_timeout()
        assert eng.remaining == 1499
