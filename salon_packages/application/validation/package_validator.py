from __future__ import annotations

import logging
import re
from typing import Callable, Iterable

from salon_packages.domain.entities.errors import FieldError, FieldErrorKind
from salon_packages.domain.entities.package import PackageDefinition, PackageType

FieldErrorMap = dict[str, list[FieldError]]
Rule = Callable[[PackageDefinition], FieldErrorMap]

SPECIAL_CHARACTERS = re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]+")

MIN_SEQUENCE = 1
MAX_SEQUENCE = 100

MESSAGES = {
    FieldErrorKind.invalid_characters: "Special characters are not allowed",
    FieldErrorKind.min_max_invalid: "Min value cannot be greater than max value",
    FieldErrorKind.should_be_zero: "Extension fee should be zero when complimentary",
    FieldErrorKind.invalid_sequence: "Sequence number must be between 1 and 100",
}


def _error(field: str, kind: FieldErrorKind, limit: float | None = None) -> FieldError:
    if kind == FieldErrorKind.required:
        message = f"{field} is required"
    elif kind == FieldErrorKind.min:
        message = f"Minimum value is {limit:g}"
    else:
        message = MESSAGES[kind]
    return FieldError(field=field, kind=kind, message=message, limit=limit)


def _add(errors: FieldErrorMap, error: FieldError) -> None:
    errors.setdefault(error.field, []).append(error)


def _merge(target: FieldErrorMap, source: FieldErrorMap) -> None:
    for errors in source.values():
        for error in errors:
            _add(target, error)


def _check_min(errors: FieldErrorMap, field: str, value: float | None, limit: float) -> None:
    if value is not None and value < limit:
        _add(errors, _error(field, FieldErrorKind.min, limit))


def name_rule(draft: PackageDefinition) -> FieldErrorMap:
    errors: FieldErrorMap = {}
    name = (draft.name or "").strip()
    if not name:
        _add(errors, _error("name", FieldErrorKind.required))
    elif SPECIAL_CHARACTERS.search(name):
        _add(errors, _error("name", FieldErrorKind.invalid_characters))
    return errors


def bounds_rule(draft: PackageDefinition) -> FieldErrorMap:
    """Required fields and numeric lower bounds."""
    errors: FieldErrorMap = {}

    if draft.validity is None:
        _add(errors, _error("validity", FieldErrorKind.required))
    else:
        _check_min(errors, "validity", draft.validity, 1)

    for field in ("package_type", "renewal_type", "payment_type", "available_for"):
        if getattr(draft, field) is None:
            _add(errors, _error(field, FieldErrorKind.required))

    # min/max inputs are disabled for Fixed packages
    if draft.package_type == PackageType.customizable:
        _check_min(errors, "min_selectable_services", draft.min_selectable_services, 1)
        _check_min(errors, "max_selectable_services", draft.max_selectable_services, 1)

    _check_min(errors, "extension_fee", draft.extension_fee, 0)
    _check_min(errors, "max_extensions", draft.max_extensions, 0)

    for i, minutes in enumerate(draft.available_durations):
        _check_min(errors, f"available_durations[{i}]", minutes, 1)

    for i, service in enumerate(draft.services):
        _check_min(errors, f"services[{i}].rate", service.rate, 0)

    return errors


def sequence_rule(draft: PackageDefinition) -> FieldErrorMap:
    errors: FieldErrorMap = {}
    for i, service in enumerate(draft.services):
        field = f"services[{i}].sequence_number"
        value = service.sequence_number
        if value is None:
            _add(errors, _error(field, FieldErrorKind.required))
            continue
        _check_min(errors, field, value, MIN_SEQUENCE)
        # zero means "unset" and is left to the min check above
        if value and not (0 < value <= MAX_SEQUENCE):
            _add(errors, _error(field, FieldErrorKind.invalid_sequence))
    return errors


def extension_fee_rule(draft: PackageDefinition) -> FieldErrorMap:
    errors: FieldErrorMap = {}
    if draft.is_complimentary_extension and (draft.extension_fee or 0) > 0:
        _add(errors, _error("extension_fee", FieldErrorKind.should_be_zero))
    return errors


def min_max_rule(draft: PackageDefinition, existing: FieldErrorMap | None = None) -> FieldErrorMap:
    """
    Joint rule over min/max selectable services.
    Both fields fail together or neither does. The rule is skipped while either
    field carries a failure of another kind.
    """
    existing = existing or {}
    fields = ("min_selectable_services", "max_selectable_services")
    for field in fields:
        if any(e.kind != FieldErrorKind.min_max_invalid for e in existing.get(field, [])):
            return {}

    low = draft.min_selectable_services
    high = draft.max_selectable_services
    errors: FieldErrorMap = {}
    if low and high and low > high:
        for field in fields:
            _add(errors, _error(field, FieldErrorKind.min_max_invalid))
    return errors


SINGLE_FIELD_RULES: tuple[Rule, ...] = (name_rule, bounds_rule, sequence_rule, extension_fee_rule)


def validate(draft: PackageDefinition) -> frozenset[FieldError]:
    errors: FieldErrorMap = {}
    for rule in SINGLE_FIELD_RULES:
        _merge(errors, rule(draft))
    _merge(errors, min_max_rule(draft, errors))
    return frozenset(e for field_errors in errors.values() for e in field_errors)


def errors_by_field(errors: Iterable[FieldError]) -> dict[str, set[FieldErrorKind]]:
    grouped: dict[str, set[FieldErrorKind]] = {}
    for error in errors:
        grouped.setdefault(error.field, set()).add(error.kind)
    return grouped


def diff_errors(
    previous: frozenset[FieldError],
    current: frozenset[FieldError],
) -> tuple[frozenset[FieldError], frozenset[FieldError]]:
    """Returns (added, cleared) between two validation passes."""
    return current - previous, previous - current


class PackageValidator:
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def validate(self, draft: PackageDefinition) -> frozenset[FieldError]:
        errors = validate(draft)
        if errors:
            self._logger.debug(
                "Package draft has validation errors",
                extra={"package_id": draft.id, "reason": sorted({e.kind.value for e in errors})},
            )
        return errors
