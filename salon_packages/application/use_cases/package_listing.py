from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable

from salon_packages.application.exceptions import PackageNotFoundError
from salon_packages.application.ports.package_store import PackageStorePort
from salon_packages.domain.entities.package import PackageDefinition, PaymentType


def format_services(package: PackageDefinition, shown: int = 2) -> str:
    names = [s.service_name for s in package.services]
    if len(names) <= shown:
        return ", ".join(names)
    return f"{', '.join(names[:shown])} +{len(names) - shown} more"


def extension_rule(package: PackageDefinition, currency: str = "₹") -> str:
    fee = "Free" if package.is_complimentary_extension else f"{currency}{package.extension_fee or 0:g}"
    return f"{fee} (Max: {package.max_extensions})"


def package_type_display(package: PackageDefinition) -> str:
    if package.is_customizable:
        return f"Customizable ({package.min_selectable_services}-{package.max_selectable_services})"
    return "Fixed"


def total_rate(package: PackageDefinition) -> float:
    return sum(s.rate for s in package.services)


@dataclass(frozen=True)
class PackageSummary:
    id: int | None
    name: str
    services: str
    validity: int | None
    extension_rule: str
    is_sharer_package: bool
    package_type: str
    is_booked_in_parallel: bool
    available_for: str
    rate: float
    payment_type: str
    follow_sequence: bool
    status: str


def summarize(package: PackageDefinition, currency: str = "₹") -> PackageSummary:
    return PackageSummary(
        id=package.id,
        name=package.name or "",
        services=format_services(package),
        validity=package.validity,
        extension_rule=extension_rule(package, currency),
        is_sharer_package=package.is_sharer_package,
        package_type=package_type_display(package),
        is_booked_in_parallel=package.is_booked_in_parallel,
        available_for=package.available_for.value if package.available_for else "",
        rate=total_rate(package),
        payment_type=package.payment_type.value if package.payment_type else "",
        follow_sequence=package.follow_sequence,
        status="Active" if package.is_active else "Inactive",
    )


def search(packages: Iterable[PackageDefinition], text: str | None) -> list[PackageDefinition]:
    """Case-insensitive substring match over the columns shown in the listing."""
    needle = (text or "").strip().lower()
    if not needle:
        return list(packages)

    def haystack(pkg: PackageDefinition) -> str:
        parts = [
            pkg.name or "",
            pkg.description or "",
            package_type_display(pkg),
            pkg.payment_type.value if pkg.payment_type else "",
            pkg.available_for.value if pkg.available_for else "",
        ]
        parts.extend(s.service_name for s in pkg.services)
        return " ".join(parts).lower()

    return [pkg for pkg in packages if needle in haystack(pkg)]


class PackageListingUseCase:
    def __init__(self, store: PackageStorePort, currency: str = "₹") -> None:
        self._store = store
        self._currency = currency
        self._logger = logging.getLogger(__name__)

    def list_summaries(self, text: str | None = None) -> list[PackageSummary]:
        return [summarize(p, self._currency) for p in search(self._store.list_packages(), text)]

    def packages_by_payment(self, payment_type: PaymentType) -> list[PackageDefinition]:
        """Active packages sold with the given payment type (counter sale lists)."""
        return [
            p for p in self._store.list_packages() if p.payment_type == payment_type and p.is_active
        ]

    def toggle_status(self, package_id: int) -> PackageDefinition:
        package = self._store.get_package(package_id)
        if package is None:
            raise PackageNotFoundError(package_id)
        updated = self._store.update_package(package_id, replace(package, is_active=not package.is_active))
        self._logger.info(
            "Package %s", "activated" if updated.is_active else "deactivated",
            extra={"package_id": package_id},
        )
        return updated

    def delete(self, package_id: int) -> bool:
        removed = self._store.delete_package(package_id)
        if removed:
            self._logger.info("Package deleted", extra={"package_id": package_id})
        return removed
