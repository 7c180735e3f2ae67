from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from callprof.ProfilerSystem.FunctionIdentity import FunctionIdentity


class FunctionRecord:
    """
    Call count and cumulative time of one function during a session.

    Entry timestamps are kept on a stack so that a recursive call does not
    overwrite the timestamp of the activation that is still running. Elapsed
    time is added when the outermost activation returns, so nested activations
    of the same function are not counted twice.
    """

    __slots__ = ("identity", "title", "call_count", "cumulative_time", "_entries")

    def __init__(self, identity: FunctionIdentity, title: str) -> None:
        self.identity = identity
        self.title = title
        self.call_count: int = 0
        self.cumulative_time: float = 0.0
        self._entries: List[float] = []

    @property
    def pending_entry_timestamp(self) -> Optional[float]:
        return self._entries[0] if self._entries else None

    @property
    def depth(self) -> int:
        return len(self._entries)

    def enter(self, now: float) -> None:
        self._entries.append(now)
        self.call_count += 1

    def leave(self, now: float) -> None:
        # A return without an observed call, e.g. a frame that was already
        # running when profiling started.
        if not self._entries or self.call_count <= 0:
            return
        entry = self._entries.pop()
        if not self._entries:
            self.cumulative_time += now - entry

    def __repr__(self) -> str:
        return (
            f"FunctionRecord({self.identity!r}, count={self.call_count}, "
            f"time={self.cumulative_time:.6f})"
        )
