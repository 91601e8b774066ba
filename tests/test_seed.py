"""Tests for the demo content seeder."""

from datetime import datetime

from sqlalchemy import func, select

from dagobah.models import Channel, Item
from dagobah.seed import DEMO_CHANNELS, DEMO_ITEMS, ensure_channel, ensure_item, seed

NOW = datetime(2014, 6, 1, 12, 0, 0)


def count(session, model):
    return session.execute(select(func.count()).select_from(model)).scalar_one()


def test_seed_is_idempotent(session):
    seed(session, now=NOW)
    seed(session, now=NOW)

    assert count(session, Channel) == len(DEMO_CHANNELS)
    assert count(session, Item) == len(DEMO_ITEMS)


def test_ensure_channel_converges(session):
    first = ensure_channel(session, "golang", "Go")
    second = ensure_channel(session, "golang", "The Go Blog")

    assert first.id == second.id
    assert second.title == "The Go Blog"
    assert count(session, Channel) == 1


def test_ensure_item_updates_changed_fields(session):
    ensure_item(session, "k", "Old", "golang", NOW, "old body")
    updated = ensure_item(session, "k", "New", "golang", NOW, "new body")

    assert updated.title == "New"
    assert updated.content == "new body"
    assert count(session, Item) == 1
