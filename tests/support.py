"""
In-memory stand-ins for the repositories.

`FakeStore.install` monkeypatches every repository function the services
call, so API tests exercise routers, validation, services, sanitization and
error handling without Postgres.
"""

from __future__ import annotations

import copy
import datetime as dt
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Any

import pytest

from addresses import repository as address_repository
from auth import security
from core import db, errors
from expense_types import repository as type_repository
from expenses import repository as expense_repository
from service_providers import repository as provider_repository
from users import repository as user_repository

API_KEY = "test-api-key"

USER_PASSWORDS = {
    "michael@jones.com": "michael",
    "mary@jones.com": "mary",
    "paul@jones.com": "paul",
}

TYPES = [
    {"id": 1, "name": "Water", "description": "Water utility service providers"},
    {"id": 2, "name": "Gas", "description": "Gas utility service providers"},
    {"id": 3, "name": "Electric", "description": "Power utility service providers"},
    {"id": 4, "name": "Groceries", "description": "Groceries service providers"},
    {"id": 5, "name": "Insurance", "description": "Insurance service providers"},
    {"id": 6, "name": "HVAC/Heat Pump", "description": "Cooling and Heating service providers"},
    {"id": 7, "name": "Plumbing", "description": "Plumbing service providers"},
]

ADDRESSES = [
    {"id": 1, "street": "Ap #479-8906 Magnis Street", "city": "San Miguel", "state": "VA", "zipcode": "V2A 4H0"},
    {"id": 2, "street": "Ap #621-6141 Non, St.", "city": "Juneau", "state": "MD", "zipcode": "65987-48807"},
    {"id": 3, "street": "3091 Sem Ave", "city": "Taupo", "state": "MD", "zipcode": "70607"},
    {"id": 4, "street": "P.O. Box 741, 2975 Quis St.", "city": "Vienna", "state": "VA", "zipcode": "531674"},
    {"id": 5, "street": "3092 Pede Avenue", "city": "Washington", "state": "DC", "zipcode": "08640"},
    {"id": 6, "street": "Ap #810-701 Eget Street", "city": "Washington", "state": "DC", "zipcode": "197532"},
]

SERVICE_PROVIDERS = [
    {
        "id": 1, "user_id": 1, "type_id": 4, "address_id": 1,
        "name": "Nunc Incorporated",
        "description": "mauris id sapien. Cras dolor dolor, tempus non, lacinia at.",
        "telephone": "669624543", "email": "consectetuer@sitamet.org",
    },
    {
        "id": 2, "user_id": 1, "type_id": 1, "address_id": 2,
        "name": "Aliquam Ltd", "description": "Water delivery",
        "telephone": "555010203", "email": "water@aliquam.com",
    },
    {
        "id": 3, "user_id": 1, "type_id": 7, "address_id": 3,
        "name": "Quis Plumbing", "description": "Emergency plumbing",
        "telephone": "555040506", "email": "help@quisplumbing.com",
    },
    {
        "id": 4, "user_id": 2, "type_id": 3, "address_id": 4,
        "name": "Vienna Power", "description": "Electric utility",
        "telephone": "555070809", "email": "billing@viennapower.com",
    },
    {
        "id": 5, "user_id": 3, "type_id": 5, "address_id": 5,
        "name": "Pede Insurance", "description": "Home insurance",
        "telephone": "555111213", "email": "claims@pede.com",
    },
]

EXPENSES = [
    {
        "id": 1, "user_id": 1, "type_id": 1, "amount": Decimal("45.10"),
        "name": "Water bill", "description": "March water bill", "date": dt.date(2021, 3, 2),
    },
    {
        "id": 2, "user_id": 1, "type_id": 4, "amount": Decimal("120.00"),
        "name": "Groceries", "description": "Weekly groceries", "date": dt.date(2021, 3, 5),
    },
    {
        "id": 3, "user_id": 2, "type_id": 2, "amount": Decimal("60.00"),
        "name": "Gas bill", "description": "February gas bill", "date": dt.date(2021, 2, 27),
    },
]


class FakeStore:
    """Dict-backed tables that mirror the repository contracts."""

    def __init__(self) -> None:
        self.users: dict[int, dict] = {}
        self.types: dict[int, dict] = {}
        self.addresses: dict[int, dict] = {}
        self.providers: dict[int, dict] = {}
        self.expenses: dict[int, dict] = {}

    def seed(self) -> None:
        for index, (username, password) in enumerate(USER_PASSWORDS.items(), start=1):
            self.users[index] = {
                "id": index,
                "username": username,
                "password": security.hash_password(password),
            }
        for table, rows in (
            (self.types, TYPES),
            (self.addresses, ADDRESSES),
            (self.providers, SERVICE_PROVIDERS),
            (self.expenses, EXPENSES),
        ):
            for row in rows:
                table[row["id"]] = copy.deepcopy(row)

    @staticmethod
    def _next_id(table: dict[int, dict]) -> int:
        return max(table, default=0) + 1

    def _insert(self, table: dict[int, dict], values: dict[str, Any]) -> dict:
        row = {"id": self._next_id(table), **values}
        table[row["id"]] = row
        return dict(row)

    def _joined(self, provider: dict) -> dict:
        address = self.addresses[provider["address_id"]]
        return {**provider, **{k: address[k] for k in ("street", "city", "state", "zipcode")}}

    # users

    async def create_user(self, *, username: str, password_hash: str) -> dict:
        return self._insert(self.users, {"username": username.strip(), "password": password_hash})

    async def get_user_by_username(self, username: str) -> dict | None:
        for row in self.users.values():
            if row["username"] == (username or "").strip():
                return dict(row)
        return None

    async def update_password(self, *, user_id: int, current_hash: str, new_hash: str) -> dict | None:
        row = self.users.get(user_id)
        if row is None or row["password"] != current_hash:
            return None
        row["password"] = new_hash
        return dict(row)

    async def delete_user(self, user_id: int) -> int:
        if self.users.pop(user_id, None) is None:
            return 0
        for provider_id, row in list(self.providers.items()):
            if row["user_id"] == user_id:
                del self.providers[provider_id]
                del self.addresses[row["address_id"]]
        for expense_id, row in list(self.expenses.items()):
            if row["user_id"] == user_id:
                del self.expenses[expense_id]
        return 1

    # types

    async def list_types(self) -> list[dict]:
        return [dict(row) for _, row in sorted(self.types.items())]

    async def get_type(self, type_id: int) -> dict | None:
        row = self.types.get(type_id)
        return dict(row) if row is not None else None

    async def create_type(self, *, name: str, description: str) -> dict:
        return self._insert(self.types, {"name": name, "description": description})

    async def update_type(self, type_id: int, *, name: str, description: str) -> dict | None:
        row = self.types.get(type_id)
        if row is None:
            return None
        row.update(name=name, description=description)
        return dict(row)

    async def delete_type(self, type_id: int) -> int:
        return 1 if self.types.pop(type_id, None) is not None else 0

    # expenses

    async def list_expenses_for_user(self, user_id: int) -> list[dict]:
        rows = [dict(row) for row in self.expenses.values() if row["user_id"] == user_id]
        return sorted(rows, key=lambda row: (row["date"], row["id"]), reverse=True)

    async def get_expense(self, expense_id: int) -> dict | None:
        row = self.expenses.get(expense_id)
        return dict(row) if row is not None else None

    async def create_expense(self, **fields: Any) -> dict:
        return self._insert(self.expenses, fields)

    async def update_expense(self, expense_id: int, **fields: Any) -> dict | None:
        row = self.expenses.get(expense_id)
        if row is None or row["user_id"] != fields["user_id"]:
            return None
        row.update(fields)
        return dict(row)

    async def delete_expense(self, expense_id: int, *, user_id: int) -> int:
        row = self.expenses.get(expense_id)
        if row is None or row["user_id"] != user_id:
            return 0
        del self.expenses[expense_id]
        return 1

    # addresses

    async def get_address(self, address_id: int) -> dict | None:
        row = self.addresses.get(address_id)
        return dict(row) if row is not None else None

    async def create_address(self, address: dict[str, Any]) -> dict:
        return self._insert(self.addresses, dict(address))

    async def update_address(self, address_id: int, address: dict[str, Any]) -> dict | None:
        row = self.addresses.get(address_id)
        if row is None:
            return None
        row.update(address)
        return dict(row)

    async def delete_address(self, address_id: int) -> int:
        return 1 if self.addresses.pop(address_id, None) is not None else 0

    # service providers

    async def get_joined(self, provider_id: int) -> dict | None:
        row = self.providers.get(provider_id)
        return self._joined(row) if row is not None else None

    async def list_joined_for_user(self, user_id: int) -> list[dict]:
        return [self._joined(row) for _, row in sorted(self.providers.items()) if row["user_id"] == user_id]

    async def create_with_address(self, provider: dict[str, Any], address: dict[str, Any]) -> tuple[dict, dict]:
        address_row = self._insert(self.addresses, dict(address))
        provider_row = self._insert(self.providers, {**provider, "address_id": address_row["id"]})
        return provider_row, address_row

    async def update_with_address(
        self,
        provider_id: int,
        provider: dict[str, Any],
        address: dict[str, Any],
    ) -> tuple[dict, dict]:
        row = self.providers.get(provider_id)
        if row is None or row["user_id"] != provider["user_id"]:
            raise errors.NotFound("Service Provider couldn't be updated")
        row.update({k: v for k, v in provider.items() if k != "user_id"})
        address_row = self.addresses[row["address_id"]]
        address_row.update(address)
        return dict(row), dict(address_row)

    async def delete_with_address(self, provider_id: int, *, user_id: int) -> int:
        row = self.providers.get(provider_id)
        if row is None or row["user_id"] != user_id:
            raise errors.NotFound("The service provider doesn't exist")
        del self.providers[provider_id]
        del self.addresses[row["address_id"]]
        return row["address_id"]

    def install(self, monkeypatch: pytest.MonkeyPatch) -> None:
        patches = {
            user_repository: (
                "create_user", "get_user_by_username", "update_password", "delete_user",
            ),
            type_repository: (
                "list_types", "get_type", "create_type", "update_type", "delete_type",
            ),
            expense_repository: (
                "list_expenses_for_user", "get_expense", "create_expense", "update_expense", "delete_expense",
            ),
            address_repository: (
                "get_address", "create_address", "update_address", "delete_address",
            ),
            provider_repository: (
                "get_joined", "list_joined_for_user", "create_with_address",
                "update_with_address", "delete_with_address",
            ),
        }
        for module, names in patches.items():
            for name in names:
                monkeypatch.setattr(module, name, getattr(self, name))


class FakeConnection:
    """Scripted asyncpg connection that records every statement it runs."""

    def __init__(
        self,
        *,
        fetchrow: list[Any] = (),
        fetch: list[list[Any]] = (),
        execute: list[str] = (),
    ) -> None:
        self._fetchrow = list(fetchrow)
        self._fetch = list(fetch)
        self._execute = list(execute)
        self.calls: list[tuple[str, str, tuple]] = []

    async def fetchrow(self, sql: str, *args: Any) -> Any:
        self.calls.append(("fetchrow", " ".join(sql.split()), args))
        return self._fetchrow.pop(0)

    async def fetch(self, sql: str, *args: Any) -> list[Any]:
        self.calls.append(("fetch", " ".join(sql.split()), args))
        return self._fetch.pop(0)

    async def execute(self, sql: str, *args: Any) -> str:
        self.calls.append(("execute", " ".join(sql.split()), args))
        return self._execute.pop(0)


class FakeTransaction:
    def __init__(self, conn: FakeConnection) -> None:
        self.conn = conn
        self.committed = False
        self.rolled_back = False

    @asynccontextmanager
    async def __call__(self):
        try:
            yield self.conn
        except BaseException:
            self.rolled_back = True
            raise
        self.committed = True


def install_transaction(monkeypatch: pytest.MonkeyPatch, conn: FakeConnection) -> FakeTransaction:
    transaction = FakeTransaction(conn)
    monkeypatch.setattr(db, "transaction", transaction)
    return transaction
