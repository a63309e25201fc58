from devblog.services.debounce import DebounceTimer, TkScheduler


class FakeWidget:
    def __init__(self):
        self.scheduled = []
        self.cancelled = []

    def after(self, delay_ms, callback):
        self.scheduled.append((delay_ms, callback))
        return f"after#{len(self.scheduled)}"

    def after_cancel(self, handle):
        if handle == "after#gone":
            raise RuntimeError("invalid command name")
        self.cancelled.append(handle)


def test_only_last_trigger_fires(scheduler):
    calls = []
    timer = DebounceTimer(scheduler, delay_ms=300)
    timer.trigger(lambda: calls.append("a"))
    scheduler.advance(200)
    timer.trigger(lambda: calls.append("b"))
    scheduler.advance(200)
    assert calls == []
    assert timer.pending
    scheduler.advance(100)
    assert calls == ["b"]
    assert not timer.pending
    assert scheduler.pending == 0


def test_cancel_discards_pending_callback(scheduler):
    calls = []
    timer = DebounceTimer(scheduler, delay_ms=50)
    timer.trigger(lambda: calls.append(1))
    timer.cancel()
    scheduler.advance(100)
    assert calls == []
    assert not timer.pending
    # Cancelling twice is harmless
    timer.cancel()


def test_flush_runs_immediately_once(scheduler):
    calls = []
    timer = DebounceTimer(scheduler, delay_ms=50)
    assert timer.flush() is False
    timer.trigger(lambda: calls.append(1))
    assert timer.flush() is True
    scheduler.advance(100)
    assert calls == [1]


def test_callback_may_retrigger(scheduler):
    calls = []
    timer = DebounceTimer(scheduler, delay_ms=10)

    def tick():
        calls.append(len(calls))
        if len(calls) < 3:
            timer.trigger(tick)

    timer.trigger(tick)
    scheduler.advance(100)
    assert calls == [0, 1, 2]
    assert not timer.pending


def test_tk_scheduler_delegates_to_widget():
    widget = FakeWidget()
    tk_scheduler = TkScheduler(widget)
    handle = tk_scheduler.schedule(300, print)
    assert handle == "after#1"
    assert widget.scheduled == [(300, print)]
    tk_scheduler.cancel(handle)
    assert widget.cancelled == ["after#1"]
    # Errors from an already fired id are ignored
    tk_scheduler.cancel("after#gone")
