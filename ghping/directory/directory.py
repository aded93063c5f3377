"""
In-memory engineer directory.

Built once at startup from the roster and shared read-only by every request.
"""

import logging
from types import MappingProxyType
from typing import Iterable, Iterator, Optional
from ghping.directory.models import EngineerRecord

logger = logging.getLogger(__name__)


class EngineerDirectory:
    """Immutable table of engineers keyed by canonical name."""

    def __init__(self, records: Iterable[EngineerRecord]):
        by_name = {}
        for record in records:
            if record.name in by_name:
                raise ValueError(f"Duplicate engineer name: {record.name}")
            by_name[record.name] = record

        self._by_name = MappingProxyType(by_name)
        self._records = tuple(by_name.values())
        self._warn_on_shared_handles()

    def _warn_on_shared_handles(self):
        for attr in ("chat_handle", "github_handle"):
            seen = {}
            for record in self._records:
                handle = getattr(record, attr)
                if not handle:
                    continue
                if handle in seen:
                    logger.warning(
                        f"{attr} '{handle}' is configured for both {seen[handle]} and {record.name}; "
                        f"lookups will return {seen[handle]}"
                    )
                else:
                    seen[handle] = record.name

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[EngineerRecord]:
        return iter(self._records)

    @property
    def names(self) -> list[str]:
        return list(self._by_name)

    def find_by_name(self, name: Optional[str]) -> Optional[EngineerRecord]:
        if not name:
            return None
        return self._by_name.get(name)

    def find_by_chat_handle(self, handle: Optional[str]) -> Optional[EngineerRecord]:
        """Find an engineer by Slack username."""
        return self._find("chat_handle", handle)

    def find_by_github_handle(self, handle: Optional[str]) -> Optional[EngineerRecord]:
        """Find an engineer by GitHub login."""
        return self._find("github_handle", handle)

    def _find(self, attr: str, handle: Optional[str]) -> Optional[EngineerRecord]:
        if not handle:
            return None
        for record in self._records:
            if getattr(record, attr) == handle:
                return record
        return None
