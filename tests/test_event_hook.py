from types import SimpleNamespace

import pytest

from callprof.ProfilerSystem.EventHook import EventHook
from callprof.ProfilerSystem.FunctionIdentity import FunctionIdentity
from callprof.ProfilerSystem.ProfileEvent import FrameMetadata, ProfileEvent
from callprof.ProfilerSystem.RecordStore import RecordStore

from conftest import FakeClock

FOO = FunctionIdentity("app", "foo", 10)


def foo():
    return 1


@pytest.fixture
def hook(clock: FakeClock) -> EventHook:
    return EventHook(RecordStore(), clock)


def send(hook, clock, at, type_, name="foo"):
    clock.now = at
    hook.handle(ProfileEvent(type_, FrameMetadata("app.py", name, 10)))


def test_call_counts_every_call_event(hook, clock):
    for i in range(5):
        send(hook, clock, i, ProfileEvent.Type.CALL)
        send(hook, clock, i + 0.5, ProfileEvent.Type.RETURN)
    send(hook, clock, 9, ProfileEvent.Type.CALL, name="bar")
    records = {r.identity.symbol_name: r for r in hook.records.all()}
    assert records["foo"].call_count == 5
    assert records["bar"].call_count == 1


def test_time_is_sum_of_invocations(hook, clock):
    send(hook, clock, 0.0, ProfileEvent.Type.CALL)
    send(hook, clock, 0.25, ProfileEvent.Type.RETURN)
    send(hook, clock, 1.0, ProfileEvent.Type.CALL)
    send(hook, clock, 1.5, ProfileEvent.Type.RETURN)
    record = hook.records.get(FOO)
    assert record.cumulative_time == pytest.approx(0.75)


def test_recursive_calls_are_not_counted_twice(hook, clock):
    send(hook, clock, 0.0, ProfileEvent.Type.CALL)
    send(hook, clock, 1.0, ProfileEvent.Type.CALL)
    send(hook, clock, 2.0, ProfileEvent.Type.RETURN)
    send(hook, clock, 3.0, ProfileEvent.Type.RETURN)
    record = hook.records.get(FOO)
    assert record.call_count == 2
    assert record.cumulative_time == pytest.approx(3.0)


def test_return_without_call_creates_empty_record(hook, clock):
    send(hook, clock, 1.0, ProfileEvent.Type.RETURN)
    record = hook.records.get(FOO)
    assert record.call_count == 0
    assert record.cumulative_time == 0.0


def test_errors_never_leave_the_hook():
    def broken_clock():
        raise RuntimeError("clock failure")

    hook = EventHook(RecordStore(), broken_clock)
    hook.handle(ProfileEvent.call(FrameMetadata("app.py", "foo", 10)))
    assert hook(SimpleNamespace(), "call", None) is None
    assert hook(SimpleNamespace(f_code=foo.__code__), "call", None) is None


def test_profile_function_adapter(hook, clock):
    frame = SimpleNamespace(f_code=foo.__code__)
    hook(frame, "call", None)
    clock.now = 0.5
    hook(frame, "return", 1)
    hook(frame, "line", None)
    [record] = hook.records.all()
    assert record.identity.symbol_name == "foo"
    assert record.call_count == 1
    assert record.cumulative_time == pytest.approx(0.5)


def test_builtins_are_native(hook, clock):
    hook(None, "c_call", len)
    clock.now = 0.1
    hook(None, "c_return", len)
    hook(None, "c_call", int)
    hook(None, "c_exception", int)
    records = {r.identity.symbol_name: r for r in hook.records.all()}
    assert records["len"].identity.is_native
    assert records["len"].call_count == 1
    assert records["int"].depth == 0
