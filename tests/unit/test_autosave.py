"""
Unit tests for the autosave debouncer.

Timers are replaced by a manual timer so tests decide when a save fires.
"""

import pytest

from backend.core.autosave import AutosaveDebouncer
from tests.fakes.timers import ManualTimerFactory


@pytest.fixture
def timers():
    return ManualTimerFactory()


@pytest.mark.unit
class TestAutosaveDebouncer:
    def test_only_last_schedule_saves(self, timers):
        debouncer = AutosaveDebouncer(delay=0.5, timer_factory=timers)
        saved = []

        debouncer.schedule("we-1", lambda: saved.append("first"))
        debouncer.schedule("we-1", lambda: saved.append("second"))

        assert timers.timers[0].cancelled is True
        timers.timers[0].fire()  # superseded timer racing its cancel
        timers.timers[1].fire()
        assert saved == ["second"]
        assert debouncer.pending() is False

    def test_keys_are_independent(self, timers):
        debouncer = AutosaveDebouncer(timer_factory=timers)
        debouncer.schedule("we-1", lambda: None)
        debouncer.schedule("we-2", lambda: None)

        assert debouncer.pending("we-1") and debouncer.pending("we-2")
        assert not any(t.cancelled for t in timers.timers)

    def test_cancel_single_key(self, timers):
        debouncer = AutosaveDebouncer(timer_factory=timers)
        saved = []
        debouncer.schedule("we-1", lambda: saved.append(1))
        debouncer.schedule("we-2", lambda: saved.append(2))

        debouncer.cancel("we-1")
        for timer in timers.timers:
            timer.fire()

        assert saved == [2]

    def test_close_refuses_new_work(self, timers):
        debouncer = AutosaveDebouncer(timer_factory=timers)
        debouncer.schedule("we-1", lambda: None)

        debouncer.close()
        debouncer.schedule("we-2", lambda: None)

        assert timers.timers[0].cancelled is True
        assert len(timers.timers) == 1
        assert debouncer.pending() is False

    def test_failing_callback_is_logged_not_raised(self, timers, caplog):
        debouncer = AutosaveDebouncer(timer_factory=timers)

        def boom():
            raise RuntimeError("store down")

        debouncer.schedule("we-1", boom)
        timers.timers[0].fire()

        assert "Autosave failed for we-1" in caplog.text

    def test_delay_is_passed_to_timer(self, timers):
        AutosaveDebouncer(delay=1.5, timer_factory=timers).schedule("k", lambda: None)
        assert timers.timers[0].delay == 1.5
        assert timers.timers[0].started is True
