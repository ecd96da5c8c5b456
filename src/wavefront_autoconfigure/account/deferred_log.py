"""Log buffer for messages emitted before logging is configured."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(slots=True)
class DeferredRecord:
    level: str
    event: str
    fields: dict[str, Any] = field(default_factory=dict)


class DeferredLog:
    """Collect records in order until a real structlog logger is available.

    The bootstrap runs before ``configure_logging``; records are held here and
    replayed by :meth:`switch_to`. Once switched, records go straight through.
    """

    def __init__(self) -> None:
        self._records: list[DeferredRecord] = []
        self._destination: Optional[Any] = None

    @property
    def records(self) -> list[DeferredRecord]:
        return list(self._records)

    def debug(self, event: str, **fields: Any) -> None:
        self._log("debug", event, fields)

    def info(self, event: str, **fields: Any) -> None:
        self._log("info", event, fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._log("warning", event, fields)

    def error(self, event: str, **fields: Any) -> None:
        self._log("error", event, fields)

    def switch_to(self, logger: Any) -> None:
        records, self._records = self._records, []
        self._destination = logger
        for record in records:
            getattr(logger, record.level)(record.event, **record.fields)

    def _log(self, level: str, event: str, fields: dict[str, Any]) -> None:
        if self._destination is not None:
            getattr(self._destination, level)(event, **fields)
            return
        self._records.append(DeferredRecord(level, event, fields))
