from __future__ import annotations
from typing import Dict, List, Optional

from callprof.ProfilerSystem.FunctionIdentity import FunctionIdentity, IdentityNormalizer
from callprof.ProfilerSystem.FunctionRecord import FunctionRecord


class RecordStore:
    """
    Records of one session keyed by function identity. Records are only added
    while a session runs; reset() drops all of them.
    """

    def __init__(self, normalizer: Optional[IdentityNormalizer] = None) -> None:
        self.normalizer = normalizer or IdentityNormalizer()
        self._records: Dict[FunctionIdentity, FunctionRecord] = {}

    def get_or_create(self, identity: FunctionIdentity) -> FunctionRecord:
        record = self._records.get(identity)
        if record is None:
            record = FunctionRecord(identity, self.normalizer.title(identity))
            self._records[identity] = record
        return record

    def get(self, identity: FunctionIdentity) -> Optional[FunctionRecord]:
        return self._records.get(identity)

    def reset(self) -> None:
        self._records.clear()

    def all(self) -> List[FunctionRecord]:
        """Snapshot of the records in no particular order."""
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, identity: object) -> bool:
        return identity in self._records
