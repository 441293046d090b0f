from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from salon_packages.domain.entities.errors import SelectionError
from salon_packages.domain.entities.selection_state import SelectableService


@dataclass(frozen=True)
class Applied:
    """Toggle accepted; entries is the new state."""

    entries: tuple[SelectableService, ...]


@dataclass(frozen=True)
class PendingConfirmation:
    """Toggle waiting on the caller. entries is the untouched current state."""

    prompt: str
    entries: tuple[SelectableService, ...]
    index: int


@dataclass(frozen=True)
class Rejected:
    """Toggle refused; entries is the unchanged state."""

    reason: SelectionError
    entries: tuple[SelectableService, ...]


Outcome = Union[Applied, PendingConfirmation, Rejected]
