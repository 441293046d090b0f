from __future__ import annotations

import json
import logging
import threading
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from salon_packages.application.exceptions import PackageNotFoundError
from salon_packages.application.ports.package_store import PackageStorePort
from salon_packages.domain.entities.package import (
    AvailableFor,
    PackageDefinition,
    PackageType,
    PaymentType,
    RenewalType,
    ServiceEntry,
)

logger = logging.getLogger(__name__)


def _enum_or_none(enum_cls, value):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning(
            "Unknown stored value, treating as unset",
            extra={"reason": f"{enum_cls.__name__}={value!r}"},
        )
        return None


class JsonPackageStore(PackageStorePort):
    """Packages kept in a single JSON document, rewritten atomically on every change."""

    def __init__(self, data_dir: str = "./data", seed: Iterable[PackageDefinition] = ()) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._data_dir / "packages.json"
        self._lock = threading.Lock()
        if not self._file_path.exists():
            with self._lock:
                data = self._load_data()
                for package in seed:
                    data["packages"].append(self._serialize_package(package))
                self._save_data(data)

    def _load_data(self) -> dict[str, Any]:
        """Load the packages document, return an empty one if missing."""
        if not self._file_path.exists():
            return {"packages": [], "version": 1}
        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
                if "version" not in data:
                    data["version"] = 1
                data.setdefault("packages", [])
                return data
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("Package file unreadable, starting empty", extra={"reason": str(e)})
            return {"packages": [], "version": 1}

    def _save_data(self, data: dict[str, Any]) -> None:
        """Save the packages document atomically."""
        temp_path = self._file_path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def _serialize_package(self, package: PackageDefinition) -> dict[str, Any]:
        return {
            "id": package.id,
            "name": package.name,
            "description": package.description,
            "validity": package.validity,
            "package_type": package.package_type.value if package.package_type else None,
            "min_selectable_services": package.min_selectable_services,
            "max_selectable_services": package.max_selectable_services,
            "extension_fee": package.extension_fee,
            "is_complimentary_extension": package.is_complimentary_extension,
            "max_extensions": package.max_extensions,
            "available_durations": list(package.available_durations),
            "renewal_type": package.renewal_type.value if package.renewal_type else None,
            "payment_type": package.payment_type.value if package.payment_type else None,
            "available_for": package.available_for.value if package.available_for else None,
            "apply_for_all_outlets": package.apply_for_all_outlets,
            "is_booked_in_parallel": package.is_booked_in_parallel,
            "is_sharer_package": package.is_sharer_package,
            "follow_sequence": package.follow_sequence,
            "services": [
                {
                    "service_id": s.service_id,
                    "service_name": s.service_name,
                    "sequence_number": s.sequence_number,
                    "rate": s.rate,
                }
                for s in package.services
            ],
            "outlets": [dict(o) for o in package.outlets],
            "is_active": package.is_active,
            "created_date": package.created_date.isoformat() if package.created_date else None,
        }

    def _deserialize_package(self, data: dict[str, Any]) -> PackageDefinition:
        created_date = None
        if data.get("created_date"):
            try:
                created_date = datetime.fromisoformat(data["created_date"])
            except (ValueError, TypeError):
                pass

        return PackageDefinition(
            id=data.get("id"),
            name=data.get("name"),
            description=data.get("description"),
            validity=data.get("validity"),
            package_type=_enum_or_none(PackageType, data.get("package_type")),
            min_selectable_services=data.get("min_selectable_services"),
            max_selectable_services=data.get("max_selectable_services"),
            extension_fee=data.get("extension_fee", 0),
            is_complimentary_extension=data.get("is_complimentary_extension", False),
            max_extensions=data.get("max_extensions"),
            available_durations=tuple(sorted(data.get("available_durations", []))),
            renewal_type=_enum_or_none(RenewalType, data.get("renewal_type")),
            payment_type=_enum_or_none(PaymentType, data.get("payment_type")),
            available_for=_enum_or_none(AvailableFor, data.get("available_for")),
            apply_for_all_outlets=data.get("apply_for_all_outlets", True),
            is_booked_in_parallel=data.get("is_booked_in_parallel", False),
            is_sharer_package=data.get("is_sharer_package", False),
            follow_sequence=data.get("follow_sequence", False),
            services=tuple(
                ServiceEntry(
                    service_id=s["service_id"],
                    service_name=s.get("service_name", ""),
                    sequence_number=s.get("sequence_number"),
                    rate=s.get("rate", 0),
                )
                for s in data.get("services", [])
            ),
            outlets=tuple(data.get("outlets", [])),
            is_active=data.get("is_active", True),
            created_date=created_date,
        )

    def list_packages(self) -> list[PackageDefinition]:
        with self._lock:
            data = self._load_data()
        return [self._deserialize_package(p) for p in data["packages"]]

    def get_package(self, package_id: int) -> PackageDefinition | None:
        for package in self.list_packages():
            if package.id == package_id:
                return package
        return None

    def create_package(self, package: PackageDefinition) -> PackageDefinition:
        with self._lock:
            data = self._load_data()
            new_id = max((p.get("id") or 0 for p in data["packages"]), default=0) + 1
            created = replace(package, id=new_id, created_date=datetime.now())
            data["packages"].append(self._serialize_package(created))
            self._save_data(data)
        return created

    def update_package(self, package_id: int, package: PackageDefinition) -> PackageDefinition:
        with self._lock:
            data = self._load_data()
            for i, stored in enumerate(data["packages"]):
                if stored.get("id") == package_id:
                    existing = self._deserialize_package(stored)
                    updated = replace(package, id=package_id, created_date=existing.created_date)
                    data["packages"][i] = self._serialize_package(updated)
                    self._save_data(data)
                    return updated
        raise PackageNotFoundError(package_id)

    def delete_package(self, package_id: int) -> bool:
        with self._lock:
            data = self._load_data()
            remaining = [p for p in data["packages"] if p.get("id") != package_id]
            removed = len(remaining) != len(data["packages"])
            data["packages"] = remaining
            self._save_data(data)
        return removed
