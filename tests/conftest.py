"""Shared fixtures: a recording in-memory store and an SQLite-backed one."""

import os
from datetime import datetime, timedelta

# Keep the module-level engine off PostgreSQL while tests import the app
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dagobah.db import Base, init_db
from dagobah.main import create_app, get_store
from dagobah.schemas import ChannelOut, ItemOut
from dagobah.settings import Settings
from dagobah.store import StoreError

BASE_DATE = datetime(2014, 6, 1, 12, 0, 0)


def make_items(count, channel_key="golang", prefix="post"):
    """Newest first, one hour apart."""
    return [
        ItemOut(
            key=f"{prefix}-{i}",
            title=f"Post {i}",
            channel_key=channel_key,
            date=BASE_DATE - timedelta(hours=i),
            content=f"<p>body {i}</p>",
        )
        for i in range(count)
    ]


class FakeStore:
    """ContentStore double that records every call it receives.

    ``find_items`` applies the query's equality filters, date sort, skip and
    limit. Text search matches substrings of title or content.
    """

    def __init__(self, items=(), channels=(), channel_error=None):
        self.items = list(items)
        self.channels = list(channels)
        self.channel_error = channel_error
        self.calls = []

    def find_items(self, query):
        self.calls.append(("find_items", query))
        rows = self.items
        for field, value in query.filters:
            rows = [r for r in rows if getattr(r, field) == value]
        if query.text is not None:
            needle = query.text.lower()
            rows = [r for r in rows if needle in r.title.lower() or needle in (r.content or "").lower()]
        for field in query.order:
            rows = sorted(rows, key=lambda r: r.date, reverse=field.startswith("-"))
        rows = rows[query.offset:]
        if query.max_rows is not None:
            rows = rows[:query.max_rows]
        return rows

    def find_item(self, query):
        self.calls.append(("find_item", query))
        found = self.find_items(query.limit(1))
        return found[0] if found else None

    def find_channel(self, key):
        self.calls.append(("find_channel", key))
        if self.channel_error is not None:
            raise self.channel_error
        for c in self.channels:
            if c.key == key:
                return c
        return None

    def all_channels(self):
        self.calls.append(("all_channels", None))
        return list(self.channels)


class BrokenStore(FakeStore):
    def find_items(self, query):
        self.calls.append(("find_items", query))
        raise StoreError("connection refused")


@pytest.fixture
def settings():
    return Settings(SITE_TITLE="Dagobah Test", DATABASE_URL="sqlite://")


@pytest.fixture
def channels():
    return [ChannelOut(key="golang", title="The Go Blog"), ChannelOut(key="spf13", title="spf13")]


@pytest.fixture
def store(channels):
    return FakeStore(items=make_items(25), channels=channels)


@pytest.fixture
def make_client(settings):
    def _make(store):
        app = create_app(settings, create_tables=False)
        app.dependency_overrides[get_store] = lambda: store
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client, store):
    return make_client(store)


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    db = Session()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
