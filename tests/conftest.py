import contextlib
import sys
from pathlib import Path

import pytest


class FakeScheduler:
    """Manual clock standing in for Tk's ``after``/``after_cancel``."""

    def __init__(self) -> None:
        self.now = 0
        self._jobs = {}
        self._next_id = 0

    def schedule(self, delay_ms, callback):  # noqa: ANN001
        self._next_id += 1
        self._jobs[self._next_id] = (self.now + delay_ms, callback)
        return self._next_id

    def cancel(self, handle) -> None:  # noqa: ANN001
        self._jobs.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._jobs)

    def advance(self, ms: int) -> None:
        self.now += ms
        while True:
            due = sorted(
                (when, handle) for handle, (when, _) in self._jobs.items() if when <= self.now
            )
            if not due:
                return
            _, handle = due[0]
            _, callback = self._jobs.pop(handle)
            callback()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


def pytest_configure(config):
    # Ensure repository root is importable (so 'devblog' works without install)
    with contextlib.suppress(Exception):
        root = Path(__file__).resolve().parents[1]
        sys.path.insert(0, str(root))
