"""Document snapshots and read outcomes."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from docgate.domain.value_objects import last_segment, parent_path


@dataclass(frozen=True)
class DocumentSnapshot:
    """State of one document as returned by the store."""

    path: str
    exists: bool
    data: dict[str, Any] | None = None
    create_time: datetime | None = None
    update_time: datetime | None = None

    @property
    def id(self) -> str:
        return last_segment(self.path)

    @property
    def collection_path(self) -> str:
        return parent_path(self.path)

    @classmethod
    def missing(cls, path: str) -> "DocumentSnapshot":
        return cls(path=path, exists=False)


@dataclass(frozen=True)
class ReadOutcome:
    """Result of reading one path: ``data`` is None whenever the document is absent."""

    path: str
    exists: bool
    data: dict[str, Any] | None

    @classmethod
    def from_snapshot(cls, snapshot: DocumentSnapshot) -> "ReadOutcome":
        return cls(
            path=snapshot.path,
            exists=snapshot.exists,
            data=snapshot.data if snapshot.exists else None,
        )
