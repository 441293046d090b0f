from __future__ import annotations

from salon_packages.application.ports.catalog import CatalogPort
from salon_packages.domain.entities.catalog import CatalogService, Client, Outlet
from salon_packages.infrastructure.catalog.catalog_data import CLIENTS, OUTLETS, SERVICES


class CatalogStore(CatalogPort):
    """Read-only catalog backed by in-process data."""

    def __init__(
        self,
        services: dict[int, CatalogService] | None = None,
        outlets: dict[int, Outlet] | None = None,
        clients: dict[int, Client] | None = None,
    ) -> None:
        self._services = services if services is not None else SERVICES
        self._outlets = outlets if outlets is not None else OUTLETS
        self._clients = clients if clients is not None else CLIENTS

    def list_services(self) -> list[CatalogService]:
        return list(self._services.values())

    def get_service(self, service_id: int) -> CatalogService | None:
        return self._services.get(service_id)

    def list_outlets(self) -> list[Outlet]:
        return list(self._outlets.values())

    def list_clients(self) -> list[Client]:
        return list(self._clients.values())

    def get_client(self, client_id: int) -> Client | None:
        return self._clients.get(client_id)
