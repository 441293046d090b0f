from __future__ import annotations

from abc import ABC, abstractmethod

from salon_packages.domain.entities.catalog import CatalogService, Client, Outlet


class CatalogPort(ABC):
    @abstractmethod
    def list_services(self) -> list[CatalogService]:
        raise NotImplementedError

    @abstractmethod
    def get_service(self, service_id: int) -> CatalogService | None:
        raise NotImplementedError

    @abstractmethod
    def list_outlets(self) -> list[Outlet]:
        raise NotImplementedError

    @abstractmethod
    def list_clients(self) -> list[Client]:
        raise NotImplementedError

    @abstractmethod
    def get_client(self, client_id: int) -> Client | None:
        raise NotImplementedError
