from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class PackageType(str, Enum):
    fixed = "Fixed"
    customizable = "Customizable"


class RenewalType(str, Enum):
    auto = "Auto"
    manual = "Manual"


class PaymentType(str, Enum):
    pre_paid = "Pre-paid"
    post_paid = "Post-paid"


class AvailableFor(str, Enum):
    all = "All"
    females = "Females"
    males = "Males"


@dataclass(frozen=True)
class ServiceEntry:
    """A catalog service as embedded in a package. Selection flags are not stored here."""

    service_id: int
    service_name: str
    sequence_number: int | None = 1
    rate: float = 0


@dataclass(frozen=True)
class PackageDefinition:
    name: str | None = None
    description: str | None = None
    validity: int | None = 30
    package_type: PackageType | None = PackageType.fixed
    min_selectable_services: int | None = 1
    max_selectable_services: int | None = 5
    extension_fee: float | None = 0
    is_complimentary_extension: bool = False
    max_extensions: int | None = 1
    available_durations: tuple[int, ...] = ()
    renewal_type: RenewalType | None = RenewalType.manual
    payment_type: PaymentType | None = PaymentType.pre_paid
    available_for: AvailableFor | None = AvailableFor.all
    apply_for_all_outlets: bool = True
    is_booked_in_parallel: bool = False
    is_sharer_package: bool = False
    follow_sequence: bool = False
    services: tuple[ServiceEntry, ...] = ()
    outlets: tuple[dict[str, Any], ...] = field(default=(), compare=False)
    is_active: bool = True
    id: int | None = None
    created_date: datetime | None = None

    @property
    def is_customizable(self) -> bool:
        return self.package_type == PackageType.customizable

    @property
    def is_fixed(self) -> bool:
        return self.package_type == PackageType.fixed

    def ordered_services(self) -> tuple[ServiceEntry, ...]:
        """Services in sequence order; unset sequence numbers sort last."""
        return tuple(
            sorted(
                self.services,
                key=lambda s: s.sequence_number if s.sequence_number else 101,
            )
        )
