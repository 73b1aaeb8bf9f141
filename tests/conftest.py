"""
Shared fixtures: an in-memory stand-in for the Supabase client and a
TestClient with the Supabase and auth dependencies overridden.
"""

import os

os.environ.setdefault("ADMIN_BOOTSTRAP_ENABLED", "false")
os.environ.setdefault("DESIGNATED_ADMIN_EMAIL", "admin@example.com")
os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_KEY", "anon-key")

import copy
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient


class FakeStoreError(Exception):
    pass


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload: Any = None
        self.filters: List[tuple] = []
        self.order_by: Optional[tuple] = None
        self.limit_n: Optional[int] = None
        self.offset_n = 0

    def select(self, columns="*"):
        self.op = "select"
        self.columns = columns
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, lambda v, value=value: v == value))
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append((column, lambda v, values=values: v in values))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def offset(self, n):
        self.offset_n = n
        return self

    def _matches(self, row):
        return all(check(row.get(column)) for column, check in self.filters)

    def _project(self, row):
        if self.columns.strip() == "*":
            return dict(row)
        keys = [c.strip() for c in self.columns.split(",")]
        return {k: row.get(k) for k in keys}

    def execute(self):
        if (self.table, self.op) in self.db.failures:
            raise FakeStoreError(self.db.failures[(self.table, self.op)])
        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            new_rows = self.payload if isinstance(self.payload, list) else [self.payload]
            rows.extend(copy.deepcopy(new_rows))
            self.db.writes.append((self.table, "insert", new_rows))
            return FakeResponse(copy.deepcopy(new_rows))

        matched = [row for row in rows if self._matches(row)]
        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            self.db.writes.append((self.table, "update", dict(self.payload)))
            return FakeResponse(copy.deepcopy(matched))
        if self.op == "delete":
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            self.db.writes.append((self.table, "delete", [row.get("id") for row in matched]))
            return FakeResponse(copy.deepcopy(matched))

        if self.order_by is not None:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda r: r.get(column) or "", reverse=desc)
        matched = matched[self.offset_n:]
        if self.limit_n is not None:
            matched = matched[:self.limit_n]
        return FakeResponse([self._project(row) for row in matched])


class FakeAuthAdmin:
    def __init__(self, db: "FakeSupabase"):
        self.db = db

    def list_users(self, page=None, per_page=None):
        if "list_users" in self.db.auth_failures:
            raise FakeStoreError(self.db.auth_failures["list_users"])
        users = self.db.users
        if page is not None and per_page:
            start = (page - 1) * per_page
            users = users[start:start + per_page]
        return list(users)

    def update_user_by_id(self, uid, attributes):
        if "update_user_by_id" in self.db.auth_failures:
            raise FakeStoreError(self.db.auth_failures["update_user_by_id"])
        for user in self.db.users:
            if user.id == uid:
                if "user_metadata" in attributes:
                    user.user_metadata = dict(attributes["user_metadata"])
                self.db.writes.append(("auth.users", "update_metadata", uid))
                return SimpleNamespace(user=user)
        return SimpleNamespace(user=None)

    def delete_user(self, uid):
        if "delete_user" in self.db.auth_failures:
            raise FakeStoreError(self.db.auth_failures["delete_user"])
        self.db.users = [u for u in self.db.users if u.id != uid]
        self.db.writes.append(("auth.users", "delete", uid))


class FakeAuth:
    def __init__(self, db: "FakeSupabase"):
        self.db = db
        self.admin = FakeAuthAdmin(db)

    def sign_up(self, credentials):
        if any(u.email == credentials["email"] for u in self.db.users):
            raise FakeStoreError("User already registered")
        user = self.db.add_user(f"user-{len(self.db.users) + 1}", credentials["email"])
        return SimpleNamespace(user=user, session=None)

    def get_user(self, jwt=None):
        for user in self.db.users:
            if jwt == f"token-{user.id}":
                user.created_at = "2024-01-01T00:00:00+00:00"
                user.updated_at = None
                return SimpleNamespace(user=user)
        raise FakeStoreError("invalid JWT")


class FakeSupabase:
    """Just enough of supabase.Client for the services under test."""

    def __init__(self):
        self.tables: Dict[str, List[dict]] = {}
        self.users: List[SimpleNamespace] = []
        self.writes: List[tuple] = []
        self.failures: Dict[tuple, str] = {}
        self.auth_failures: Dict[str, str] = {}
        self.auth = FakeAuth(self)

    def table(self, name):
        return FakeQuery(self, name)

    def add_user(self, user_id, email, user_metadata=None):
        user = SimpleNamespace(
            id=user_id, email=email,
            user_metadata=user_metadata or {}, app_metadata={}
        )
        self.users.append(user)
        return user

    def add_profile(self, user_id, role="subcontractor", company_name="Acme Builders", **extra):
        row = {
            "id": user_id,
            "company_name": company_name,
            "contact_person": None,
            "phone_number": None,
            "address": None,
            "role": role,
            "created_at": "2024-01-01T00:00:00+00:00",
            "updated_at": None,
        }
        row.update(extra)
        self.tables.setdefault("profiles", []).append(row)
        return row

    def profile(self, user_id):
        for row in self.tables.get("profiles", []):
            if row["id"] == user_id:
                return row
        return None


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def current_user():
    return {"id": "user-1", "email": "crew@example.com", "user_metadata": {}, "app_metadata": {}}


@pytest.fixture
def client(fake_supabase, current_user):
    from app.main import app
    from app.core.dependencies import get_current_user_id
    from app.database.supabase_client import get_supabase, get_service_supabase

    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_service_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_current_user_id] = lambda: current_user
    yield TestClient(app)
    app.dependency_overrides.clear()
