from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FieldErrorKind(str, Enum):
    required = "required"
    invalid_characters = "invalid_characters"
    min_max_invalid = "min_max_invalid"
    should_be_zero = "should_be_zero"
    invalid_sequence = "invalid_sequence"
    min = "min"


class SelectionErrorKind(str, Enum):
    max_services_reached = "max_services_reached"
    min_services_required = "min_services_required"
    no_service_selected = "no_service_selected"
    selection_out_of_bounds = "selection_out_of_bounds"
    confirmation_declined = "confirmation_declined"


@dataclass(frozen=True)
class FieldError:
    field: str  # e.g. "name", "services[2].sequence_number"
    kind: FieldErrorKind
    message: str = ""
    limit: float | None = None  # bound for "min" failures


@dataclass(frozen=True)
class SelectionError:
    kind: SelectionErrorKind
    message: str
