from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Gender(str, Enum):
    male = "Male"
    female = "Female"


@dataclass(frozen=True)
class CatalogService:
    id: int
    name: str
    base_rate: float
    category: str
    is_active: bool = True
    description: str | None = None


@dataclass(frozen=True)
class Outlet:
    id: int
    name: str
    location: str
    is_active: bool = True


@dataclass(frozen=True)
class Client:
    id: int
    name: str
    phone: str
    gender: Gender
    email: str | None = None
