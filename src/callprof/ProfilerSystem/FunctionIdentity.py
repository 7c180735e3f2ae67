from __future__ import annotations
import os
from types import CodeType
from typing import Dict, NamedTuple, Optional, Set

from callprof.ProfilerSystem.ProfileEvent import FrameMetadata
from callprof.ProfilerSystem.ReportLayout import ReportLayout

SOURCE_SUFFIX = ".py"
LOCAL_QUALIFIER = "<locals>."
LAMBDA_NAME = "<lambda>"


class FunctionIdentity(NamedTuple):
    """
    Aggregation key of a profiled function. Frames resolving to an equal
    identity share one record, e.g. two lambdas defined on the same line.
    """

    source_label: str
    symbol_name: str
    definition_line: int

    @property
    def is_native(self) -> bool:
        return self.source_label == ReportLayout.NATIVE_SOURCE


class IdentityNormalizer:
    """
    Turns raw frame metadata into FunctionIdentity keys and their display
    titles.

    Source paths under ``root`` are shown relative to it, the ``.py`` suffix is
    dropped, lambdas become ``Anon`` and the ``<locals>`` qualifier of nested
    functions is removed from the name.

    Identities of functions defined below ``excluded_dir`` are collected in
    ``excluded``. The check uses the absolute file path, so it holds wherever
    ``root`` points.
    """

    def __init__(
        self,
        root: Optional[str] = None,
        layout: Optional[ReportLayout] = None,
        excluded_dir: Optional[str] = None,
    ) -> None:
        self.root = os.path.abspath(root if root is not None else os.getcwd())
        self.layout = layout or ReportLayout()
        self.excluded_dir = (
            os.path.join(os.path.abspath(excluded_dir), "") if excluded_dir else None
        )
        self.excluded: Set[FunctionIdentity] = set()
        self._code_cache: Dict[CodeType, FunctionIdentity] = {}

    def source_label(self, path: Optional[str]) -> str:
        if not path:
            return ReportLayout.NATIVE_SOURCE
        if os.path.isabs(path):
            try:
                if os.path.commonpath([self.root, path]) == self.root:
                    path = os.path.relpath(path, self.root)
            except ValueError:
                # Different drives on Windows
                pass
        if path.endswith(SOURCE_SUFFIX):
            path = path[: -len(SOURCE_SUFFIX)]
        return path

    @staticmethod
    def symbol_name(name: Optional[str]) -> str:
        if not name or name == LAMBDA_NAME:
            return ReportLayout.ANONYMOUS
        if LOCAL_QUALIFIER in name:
            name = name.replace(LOCAL_QUALIFIER, "")
        if name.endswith("." + LAMBDA_NAME):
            name = name[: -len(LAMBDA_NAME)] + ReportLayout.ANONYMOUS
        return name

    def normalize(self, frame: FrameMetadata) -> FunctionIdentity:
        identity = FunctionIdentity(
            self.source_label(frame.source_label),
            self.symbol_name(frame.symbol_name),
            frame.definition_line or 0,
        )
        if self.excluded_dir and frame.source_label and os.path.isabs(frame.source_label):
            if frame.source_label.startswith(self.excluded_dir):
                self.excluded.add(identity)
        return identity

    def is_excluded(self, identity: FunctionIdentity) -> bool:
        return identity in self.excluded

    def from_code(self, code: CodeType) -> FunctionIdentity:
        """Identity of a Python frame, cached per code object."""
        identity = self._code_cache.get(code)
        if identity is None:
            identity = self.normalize(
                FrameMetadata(code.co_filename, code.co_qualname, code.co_firstlineno)
            )
            self._code_cache[code] = identity
        return identity

    def from_native(self, function: object) -> FunctionIdentity:
        """Identity of a builtin reported by a c_call/c_return event."""
        return self.normalize(
            FrameMetadata(None, getattr(function, "__qualname__", None), None)
        )

    def title(self, identity: FunctionIdentity) -> str:
        return self.layout.title(
            identity.source_label, identity.symbol_name, identity.definition_line
        )

    @property
    def cache_size(self) -> int:
        return len(self._code_cache)

    def clear_cache(self) -> None:
        # Cleared in place, the report generator holds a reference to excluded.
        self._code_cache.clear()
        self.excluded.clear()
