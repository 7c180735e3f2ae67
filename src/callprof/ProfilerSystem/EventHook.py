from __future__ import annotations
import logging
from types import FrameType
from typing import Any, Callable, Optional

from callprof.ProfilerSystem.FunctionIdentity import FunctionIdentity, IdentityNormalizer
from callprof.ProfilerSystem.ProfileEvent import ProfileEvent
from callprof.ProfilerSystem.RecordStore import RecordStore


class EventHook:
    """
    Receives call and return notifications and updates the matching records.

    An instance is installed with ``sys.setprofile`` and runs on every call and
    return of the profiled thread, so each event is kept to a clock read, a
    dictionary lookup and a few attribute writes. It is the only writer of the
    record store and must not be shared between threads.

    Generators are entered and left on every resume and yield, so their call
    count is the number of resumptions, not of generator objects created.
    """

    def __init__(self, records: RecordStore, clock: Callable[[], float]) -> None:
        self.records = records
        self.normalizer: IdentityNormalizer = records.normalizer
        self.clock = clock

    def handle(self, event: ProfileEvent) -> None:
        try:
            identity = self.normalizer.normalize(event.frame)
            if event.type is ProfileEvent.Type.CALL:
                self.on_call(identity)
            elif event.type is ProfileEvent.Type.RETURN:
                self.on_return(identity)
        except Exception:
            logging.debug(f"Ignored profiler event {event}", exc_info=True)

    def on_call(self, identity: FunctionIdentity) -> None:
        self.records.get_or_create(identity).enter(self.clock())

    def on_return(self, identity: FunctionIdentity) -> None:
        # The clock is read before the lookup so that creating a record is not
        # charged to the returning function.
        now = self.clock()
        self.records.get_or_create(identity).leave(now)

    def __call__(self, frame: FrameType, event: str, arg: Any) -> Optional[EventHook]:
        """sys.setprofile entry point."""
        try:
            if event == "call":
                self.on_call(self.normalizer.from_code(frame.f_code))
            elif event == "return":
                self.on_return(self.normalizer.from_code(frame.f_code))
            elif event == "c_call":
                self.on_call(self.normalizer.from_native(arg))
            elif event == "c_return" or event == "c_exception":
                self.on_return(self.normalizer.from_native(arg))
        except Exception:
            logging.debug(f"Ignored profiler event {event}", exc_info=True)
        return None
