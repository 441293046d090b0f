from __future__ import annotations

from abc import ABC, abstractmethod

from salon_packages.domain.entities.package import PackageDefinition


class PackageStorePort(ABC):
    @abstractmethod
    def list_packages(self) -> list[PackageDefinition]:
        raise NotImplementedError

    @abstractmethod
    def get_package(self, package_id: int) -> PackageDefinition | None:
        raise NotImplementedError

    @abstractmethod
    def create_package(self, package: PackageDefinition) -> PackageDefinition:
        """Persist a new package. Assigns id and created_date."""
        raise NotImplementedError

    @abstractmethod
    def update_package(self, package_id: int, package: PackageDefinition) -> PackageDefinition:
        """Replace package by id. Raises PackageNotFoundError if absent."""
        raise NotImplementedError

    @abstractmethod
    def delete_package(self, package_id: int) -> bool:
        raise NotImplementedError
