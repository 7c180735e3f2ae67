from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


@dataclass(frozen=True)
class FrameMetadata:
    """
    What the interpreter tells us about the function being entered or exited.
    Any field may be missing, e.g. builtins have no source file.
    """

    source_label: Optional[str] = None
    symbol_name: Optional[str] = None
    definition_line: Optional[int] = None


class ProfileEvent:
    """
    A call or return notification for one function. The event hook dispatches
    on the type; the frame metadata is resolved to a function identity there.
    """

    class Type(Enum):
        CALL = auto()
        RETURN = auto()

    __slots__ = ("type", "frame")

    def __init__(self, type_: Type, frame: FrameMetadata) -> None:
        self.type = type_
        self.frame = frame

    @classmethod
    def call(cls, frame: FrameMetadata) -> "ProfileEvent":
        return cls(cls.Type.CALL, frame)

    @classmethod
    def return_(cls, frame: FrameMetadata) -> "ProfileEvent":
        return cls(cls.Type.RETURN, frame)

    def __str__(self) -> str:
        return f"{self.type.name} {self.frame.symbol_name} ({self.frame.source_label})"
