import sys
import uuid
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import pytest

# Ensure the repository root is importable without an editable install
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


# ====================
# Supabase stand-in
# ====================


class FakeQuery:
    """Chainable builder mimicking supabase-py's table() query API."""

    def __init__(self, client: "FakeSupabase", table_name: str):
        self.client = client
        self.table_name = table_name
        self._op = "select"
        self._columns = "*"
        self._payload: Optional[Dict[str, Any]] = None
        self._filters: List[tuple] = []
        self._order: Optional[tuple] = None
        self._limit: Optional[int] = None

    def select(self, columns: str = "*") -> "FakeQuery":
        self._columns = columns
        return self

    def insert(self, data: Dict[str, Any]) -> "FakeQuery":
        self._op = "insert"
        self._payload = dict(data)
        return self

    def update(self, data: Dict[str, Any]) -> "FakeQuery":
        self._op = "update"
        self._payload = dict(data)
        return self

    def delete(self) -> "FakeQuery":
        self._op = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append(("eq", column, value))
        return self

    def neq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append(("neq", column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._order = (column, desc)
        return self

    def limit(self, count: int) -> "FakeQuery":
        self._limit = count
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        for kind, column, value in self._filters:
            same = str(row.get(column)) == str(value)
            if kind == "eq" and not same:
                return False
            if kind == "neq" and same:
                return False
        return True

    def _project(self, row: Dict[str, Any]) -> Dict[str, Any]:
        if self._columns.strip() == "*":
            return dict(row)
        keys = [c.strip() for c in self._columns.split(",")]
        return {k: row.get(k) for k in keys}

    def execute(self) -> SimpleNamespace:
        self.client.calls.append((self.table_name, self._op, self._payload))
        for predicate in self.client.failures:
            if predicate(self.table_name, self._op, self._payload):
                raise RuntimeError(f"simulated {self._op} failure on {self.table_name}")

        rows = self.client.tables.setdefault(self.table_name, [])

        if self._op == "insert":
            row = {"id": str(uuid.uuid4()), **(self._payload or {})}
            rows.append(row)
            return SimpleNamespace(data=[dict(row)])

        matched = [row for row in rows if self._matches(row)]

        if self._op == "update":
            for row in matched:
                row.update(self._payload or {})
            return SimpleNamespace(data=[dict(row) for row in matched])

        if self._op == "delete":
            self.client.tables[self.table_name] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=[dict(row) for row in matched])

        if self._order:
            column, desc = self._order
            matched.sort(key=lambda r: r.get(column), reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        return SimpleNamespace(data=[self._project(row) for row in matched])


class FakeSupabase:
    """In-memory tables plus a log of executed calls and injectable failures."""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[tuple] = []
        self.failures: List[Callable[[str, str, Optional[Dict[str, Any]]], bool]] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def fail_when(self, table: str, op: str, **match: Any) -> None:
        """Make every ``op`` on ``table`` whose payload contains ``match`` raise."""

        def predicate(t, o, payload):
            if t != table or o != op:
                return False
            return all((payload or {}).get(k) == v for k, v in match.items())

        self.failures.append(predicate)

    def ops(self, op: str) -> List[tuple]:
        return [(t, p) for t, o, p in self.calls if o == op]


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def seeded_db(fake_db) -> FakeSupabase:
    """Two categories with rooms inserted out of display order."""
    recon = {"id": str(uuid.uuid4()), "name": "Reconnaissance", "display_order": 2, "total_rooms": 1}
    intro = {"id": str(uuid.uuid4()), "name": "Introductory Rooms", "display_order": 1, "total_rooms": 2}
    fake_db.tables["categories"] = [recon, intro]
    fake_db.tables["rooms"] = [
        {"id": str(uuid.uuid4()), "title": "Second", "url": "http://example.com/b",
         "category_id": intro["id"], "display_order": 2},
        {"id": str(uuid.uuid4()), "title": "Nmap", "url": "http://example.com/c",
         "category_id": recon["id"], "display_order": 1},
        {"id": str(uuid.uuid4()), "title": "Intro", "url": "http://example.com/a",
         "category_id": intro["id"], "display_order": 1},
    ]
    fake_db.tables["user_progress"] = []
    return fake_db


@pytest.fixture
def room_ids(seeded_db) -> Dict[str, str]:
    return {row["title"]: row["id"] for row in seeded_db.tables["rooms"]}


# ====================
# Settings isolation
# ====================


SUPABASE_ENV_VARS = (
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "SUPABASE_SERVICE_ROLE_KEY",
    "VITE_SUPABASE_URL",
    "VITE_SUPABASE_ANON_KEY",
    "VITE_SUPABASE_SUPABASE_ANON_KEY",
    "CHECKLIST_PATH",
)


@pytest.fixture
def clean_settings(monkeypatch, tmp_path):
    """Fresh settings singleton read from an empty environment in an empty cwd."""
    import room_tracker.config.settings as settings_mod

    for var in SUPABASE_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings_mod, "_settings", None, raising=False)
    return tmp_path
