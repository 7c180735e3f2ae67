from typing import Callable, List, Optional

import pytest

from callprof.ProfilerSystem.ProfileEvent import FrameMetadata, ProfileEvent
from callprof.ProfilerSystem.Session import Session


class FakeClock:
    """Clock whose reading is set by the test."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeHookInstaller:
    """Stands in for sys.setprofile and remembers every installation."""

    def __init__(self) -> None:
        self.hook: Optional[Callable] = None
        self.calls: List[Optional[Callable]] = []

    def __call__(self, hook: Optional[Callable]) -> None:
        self.hook = hook
        self.calls.append(hook)


def frame(name: str, source: Optional[str] = "app.py", line: Optional[int] = 10) -> FrameMetadata:
    return FrameMetadata(source, name, line)


def call(session: Session, clock: FakeClock, at: float, name: str, **kwargs) -> None:
    clock.now = at
    session.dispatch(ProfileEvent.call(frame(name, **kwargs)))


def ret(session: Session, clock: FakeClock, at: float, name: str, **kwargs) -> None:
    clock.now = at
    session.dispatch(ProfileEvent.return_(frame(name, **kwargs)))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def installer() -> FakeHookInstaller:
    return FakeHookInstaller()


@pytest.fixture
def session(clock: FakeClock, installer: FakeHookInstaller) -> Session:
    return Session(clock=clock, set_hook=installer)
