"""
Tests for package store adapters.
"""

from __future__ import annotations

import json
import logging
import tempfile
from dataclasses import replace
from pathlib import Path

import pytest

from salon_packages.application.exceptions import PackageNotFoundError
from salon_packages.domain.entities.appointment import AppointmentDraft
from salon_packages.domain.entities.package import PackageDefinition, PackageType, ServiceEntry
from salon_packages.infrastructure.store.json_store import JsonPackageStore
from salon_packages.infrastructure.store.memory_store import MemoryAppointmentDraftStore, MemoryPackageStore
from salon_packages.infrastructure.store.seed_packages import DEMO_PACKAGES


def _package(name: str = "Steam and Scrub") -> PackageDefinition:
    return PackageDefinition(
        name=name,
        validity=15,
        package_type=PackageType.customizable,
        min_selectable_services=1,
        max_selectable_services=2,
        available_durations=(30, 60),
        services=(
            ServiceEntry(service_id=3, service_name="Body Scrub", sequence_number=1, rate=1200),
            ServiceEntry(service_id=8, service_name="Steam Bath", sequence_number=2, rate=500),
        ),
        outlets=({"outlet_id": 1, "outlet_name": "Downtown Spa"},),
    )


def test_memory_store_assigns_next_id():
    store = MemoryPackageStore(DEMO_PACKAGES)
    created = store.create_package(_package())
    assert created.id == 3
    assert created.created_date is not None
    assert store.get_package(3) == created


def test_memory_store_update_requires_existing_id():
    store = MemoryPackageStore(DEMO_PACKAGES)
    with pytest.raises(PackageNotFoundError):
        store.update_package(42, _package())

    updated = store.update_package(1, replace(_package(), name="Renamed"))
    assert updated.id == 1
    assert store.get_package(1).name == "Renamed"


def test_memory_store_delete():
    store = MemoryPackageStore(DEMO_PACKAGES)
    assert store.delete_package(2) is True
    assert store.delete_package(2) is False
    assert [p.id for p in store.list_packages()] == [1]


def test_draft_store_assigns_ids():
    store = MemoryAppointmentDraftStore()
    saved = store.save_draft(AppointmentDraft(client_id=1))
    assert saved.id
    assert store.get_draft(saved.id) == saved
    store.delete_draft(saved.id)
    assert store.get_draft(saved.id) is None


def test_json_store_persistence():
    """Packages written by one store instance are read back by another."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonPackageStore(data_dir=tmpdir)
        created = store.create_package(_package())

        reopened = JsonPackageStore(data_dir=tmpdir)
        retrieved = reopened.get_package(created.id)

        assert retrieved == created
        assert retrieved.package_type == PackageType.customizable
        assert retrieved.available_durations == (30, 60)
        assert retrieved.services[1].service_name == "Steam Bath"
        assert retrieved.outlets == ({"outlet_id": 1, "outlet_name": "Downtown Spa"},)


def test_json_store_seeds_only_new_files():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonPackageStore(data_dir=tmpdir, seed=DEMO_PACKAGES)
        assert [p.id for p in store.list_packages()] == [1, 2]
        store.delete_package(1)

        reopened = JsonPackageStore(data_dir=tmpdir, seed=DEMO_PACKAGES)
        assert [p.id for p in reopened.list_packages()] == [2]


def test_json_store_update_and_not_found():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonPackageStore(data_dir=tmpdir, seed=DEMO_PACKAGES)
        with pytest.raises(PackageNotFoundError):
            store.update_package(7, _package())

        updated = store.update_package(2, replace(_package(), is_active=False))
        assert updated.id == 2
        assert store.get_package(2).is_active is False
        assert store.create_package(_package("Another")).id == 3


def test_json_store_recovers_from_corrupt_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        Path(tmpdir, "packages.json").write_text("{not json", encoding="utf-8")
        store = JsonPackageStore(data_dir=tmpdir)
        assert store.list_packages() == []

        store.create_package(_package())
        data = json.loads(Path(tmpdir, "packages.json").read_text(encoding="utf-8"))
        assert data["version"] == 1
        assert data["packages"][0]["package_type"] == "Customizable"


def test_json_store_warns_on_unknown_enum_value(caplog):
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonPackageStore(data_dir=tmpdir)
        created = store.create_package(_package())

        path = Path(tmpdir, "packages.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        data["packages"][0]["payment_type"] = "Instalments"
        path.write_text(json.dumps(data), encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            loaded = store.get_package(created.id)

        assert loaded.payment_type is None
        assert any("PaymentType='Instalments'" in getattr(r, "reason", "") for r in caplog.records)
