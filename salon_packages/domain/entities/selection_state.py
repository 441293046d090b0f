from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from salon_packages.domain.entities.package import ServiceEntry


@dataclass(frozen=True)
class SelectableService:
    """A package service row inside a draft, joined with its selection flag."""

    entry: ServiceEntry
    is_selected: bool = False

    @property
    def service_id(self) -> int:
        return self.entry.service_id

    @property
    def service_name(self) -> str:
        return self.entry.service_name

    @property
    def sequence_number(self) -> int | None:
        return self.entry.sequence_number

    @property
    def rate(self) -> float:
        return self.entry.rate


def join_selection(
    services: Iterable[ServiceEntry],
    default: bool = False,
) -> tuple[SelectableService, ...]:
    """Pair package services with a selection flag, all set to ``default``."""
    return tuple(SelectableService(entry=s, is_selected=default) for s in services)


def selected_entries(rows: Sequence[SelectableService]) -> tuple[ServiceEntry, ...]:
    return tuple(row.entry for row in rows if row.is_selected)
