from __future__ import annotations

from typing import Protocol

from .registry import ScheduleRegistry


class ScheduleRepository(Protocol):
    def load_registry(self, *, default_schedule_id: str, timezone: str) -> ScheduleRegistry:
        """Read every schedule and assignment into an immutable registry.

        Raises ConfigurationError if the stored data breaks the default-fallback
        invariant.
        """

        raise NotImplementedError
