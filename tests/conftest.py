import os

os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "anon-key")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")

import copy
from datetime import datetime, timedelta

import fitz
import pytest
from fastapi.testclient import TestClient

from app.core.database import get_db
from app.main import app


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Minimal stand-in for the postgrest query builder."""

    def __init__(self, db, table_name):
        self.db = db
        self.table_name = table_name
        self.columns = "*"
        self.filters = []
        self.ordering = None
        self.row_limit = None
        self.rows_to_insert = None

    def select(self, columns="*"):
        self.columns = columns
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.ordering = (column, desc)
        return self

    def limit(self, count):
        self.row_limit = count
        return self

    def insert(self, rows):
        self.rows_to_insert = rows if isinstance(rows, list) else [rows]
        return self

    def execute(self):
        if self.table_name in self.db.failing_tables:
            raise Exception(f"relation \"{self.table_name}\" is unavailable")

        if self.rows_to_insert is not None:
            if self.table_name in self.db.failing_inserts:
                raise Exception(f"insert into \"{self.table_name}\" rejected")
            table = self.db.tables.setdefault(self.table_name, [])
            inserted = []
            for row in self.rows_to_insert:
                stored = copy.deepcopy(row)
                stored.setdefault("created_at", self.db.next_timestamp())
                table.append(stored)
                inserted.append(copy.deepcopy(stored))
            return FakeResponse(inserted)

        rows = [r for r in self.db.tables.get(self.table_name, []) if all(r.get(c) == v for c, v in self.filters)]
        if self.ordering:
            column, desc = self.ordering
            rows = sorted(rows, key=lambda r: r.get(column) or "", reverse=desc)
        if self.row_limit is not None:
            rows = rows[:self.row_limit]
        if self.columns != "*":
            wanted = [c.strip() for c in self.columns.split(",")]
            rows = [{c: r.get(c) for c in wanted} for r in rows]
        return FakeResponse(copy.deepcopy(rows))


class FakeBucket:
    def __init__(self, db, name):
        self.db = db
        self.name = name

    def upload(self, path, file, file_options=None):
        if self.name in self.db.failing_buckets:
            raise Exception("Bucket not found")
        self.db.files[(self.name, path)] = {"content": file, "options": file_options}
        return {"Key": f"{self.name}/{path}"}


class FakeStorage:
    def __init__(self, db):
        self.db = db

    def from_(self, bucket):
        return FakeBucket(self.db, bucket)


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.files = {}
        self.failing_tables = set()
        self.failing_inserts = set()
        self.failing_buckets = set()
        self.storage = FakeStorage(self)
        self._clock = datetime(2026, 1, 1)

    def table(self, name):
        return FakeQuery(self, name)

    def next_timestamp(self):
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()


@pytest.fixture
def fake_db():
    db = FakeSupabase()
    db.tables["teacherusers"] = [{"userId": "teacher-1", "password": "secret"}]
    return db


@pytest.fixture
def client(fake_db):
    app.dependency_overrides[get_db] = lambda: fake_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def build_pdf(*pages):
    """Returns the bytes of a PDF with one page per text argument."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text, fontsize=11)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def pdf_factory():
    return build_pdf
