import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

logger = logging.getLogger("spoedpakket.tracking")


class UserRole(str, Enum):
    CUSTOMER = "customer"
    DRIVER = "driver"
    ADMIN = "admin"


@dataclass(frozen=True)
class RoleProfile:
    name: str
    description: str


ROLE_PROFILES: dict[UserRole, RoleProfile] = {
    UserRole.CUSTOMER: RoleProfile("Customer", "Order and track parcels"),
    UserRole.DRIVER: RoleProfile("Driver", "Carry out deliveries"),
    UserRole.ADMIN: RoleProfile("Admin", "Manage the system"),
}


class RoleStore(Protocol):
    def load(self) -> str | None: ...

    def save(self, role: str) -> None: ...


class MemoryRoleStore:
    def __init__(self, role: str | None = None) -> None:
        self.role = role
        self.saves = 0

    def load(self) -> str | None:
        return self.role

    def save(self, role: str) -> None:
        self.role = role
        self.saves += 1


class JsonFileRoleStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> str | None:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as err:
            logger.warning("role state unreadable at %s: %s", self.path, err)
            return None
        role = payload.get("role") if isinstance(payload, dict) else None
        return role if isinstance(role, str) else None

    def save(self, role: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"role": role}), encoding="utf-8")


class AppState:
    """Application-wide role selection, owned by the top of the app and passed down."""

    def __init__(self, role: UserRole = UserRole.CUSTOMER, store: RoleStore | None = None) -> None:
        self._role = role
        self._store = store

    @classmethod
    def from_store(cls, store: RoleStore) -> "AppState":
        saved = store.load()
        try:
            role = UserRole(saved) if saved else UserRole.CUSTOMER
        except ValueError:
            role = UserRole.CUSTOMER
        return cls(role=role, store=store)

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def profile(self) -> RoleProfile:
        return ROLE_PROFILES[self._role]

    @property
    def is_customer(self) -> bool:
        return self._role == UserRole.CUSTOMER

    @property
    def is_driver(self) -> bool:
        return self._role == UserRole.DRIVER

    @property
    def is_admin(self) -> bool:
        return self._role == UserRole.ADMIN

    def switch_role(self, role: UserRole | str) -> bool:
        new_role = UserRole(role)
        if new_role == self._role:
            return False
        self._role = new_role
        if self._store is not None:
            self._store.save(new_role.value)
        return True
