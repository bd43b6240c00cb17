"""Domain entities, request parameters and domain errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class Role(str, Enum):
    EMPLOYEE = "employee"
    MODERATOR = "moderator"


class ReceptionStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    CLOSE = "close"


@dataclass
class User:
    id: UUID
    email: str
    password: str
    role: Role


@dataclass
class Product:
    id: UUID
    date_time: datetime
    type: str
    reception_id: UUID


@dataclass
class Reception:
    id: UUID
    date_time: datetime
    pvz_id: UUID
    status: ReceptionStatus
    products: list[Product] = field(default_factory=list)


@dataclass
class PVZ:
    id: UUID
    registration_date: datetime
    city: str
    receptions: list[Reception] = field(default_factory=list)


class DomainError(Exception):
    """Base class for business-rule violations."""

    default_message = "domain error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class EmployeeOnlyError(DomainError):
    default_message = "only employees may do this"


class ModeratorOnlyError(DomainError):
    default_message = "only moderators may do this"


class InvalidPasswordError(DomainError):
    default_message = "invalid password"


class NoInProgressReceptionError(DomainError):
    default_message = "there is no reception in progress"


class PreviousReceptionNotClosedError(DomainError):
    default_message = "previous reception is not closed"


class ReceptionNotFoundError(DomainError):
    default_message = "reception not found"


class ReceptionAlreadyClosedError(DomainError):
    default_message = "reception already closed"


class ProductNotFoundError(DomainError):
    default_message = "product not found"


@dataclass(frozen=True)
class LoginUserParam:
    email: str
    password: str


@dataclass(frozen=True)
class RegisterUserParam:
    email: str
    password: str
    role: Role


@dataclass(frozen=True)
class DummyLoginUserParam:
    role: Role


@dataclass(frozen=True)
class CreateProductParam:
    creator_role: Role
    type: str
    pvz_id: UUID


@dataclass(frozen=True)
class CreatePvzParam:
    id: UUID
    registration_date: datetime
    city: str
    creator_role: Role


@dataclass(frozen=True)
class GetPvzParam:
    page: int | None = None
    limit: int | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


@dataclass(frozen=True)
class CreateReceptionParam:
    creator_role: Role
    pvz_id: UUID


@dataclass(frozen=True)
class CloseLastReceptionParam:
    closer_role: Role
    pvz_id: UUID


@dataclass(frozen=True)
class DeleteLastReceptionParam:
    deleter_role: Role
    pvz_id: UUID