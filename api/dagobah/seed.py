import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session
from sqlalchemy import select
from .db import SessionLocal, init_db
from .models import Channel, Item

logger = logging.getLogger(__name__)

def ensure_channel(db: Session, key: str, title: str):
    existing = db.execute(select(Channel).where(Channel.key==key)).scalar_one_or_none()
    if existing:
        # Update in place if anything changed so seeds converge
        if existing.title != title:
            existing.title = title
            db.add(existing); db.commit(); db.refresh(existing)
        return existing
    c = Channel(key=key, title=title)
    db.add(c); db.commit(); db.refresh(c)
    return c

def ensure_item(db: Session, key: str, title: str, channel_key: str, date: datetime, content: str = ""):
    existing = db.execute(select(Item).where(Item.key==key)).scalar_one_or_none()
    if existing:
        changed = False
        for field, value in (("title", title), ("channel_key", channel_key), ("date", date), ("content", content)):
            if getattr(existing, field) != value:
                setattr(existing, field, value); changed = True
        if changed:
            db.add(existing); db.commit(); db.refresh(existing)
        return existing
    it = Item(key=key, title=title, channel_key=channel_key, date=date, content=content)
    db.add(it); db.commit(); db.refresh(it)
    return it

DEMO_CHANNELS = [
    ("spf13", "spf13"),
    ("golang-blog", "The Go Blog"),
]

DEMO_ITEMS = [
    ("hello-dagobah", "Hello Dagobah", "spf13",
     "<p>Dagobah serves every feed listed in its store.</p>"),
    ("encoded-content", "Encoded content", "golang-blog",
     "<content:encoded>&lt;p&gt;Syndicated &lt;b&gt;markup&lt;/b&gt;&lt;/p&gt;</content:encoded>"),
    ("go-at-google", "Go at Google", "golang-blog",
     "<p>Language design in the service of software engineering.</p>"),
]

def seed(db: Session, now: datetime | None = None):
    now = now or datetime.utcnow()
    for key, title in DEMO_CHANNELS:
        ensure_channel(db, key, title)
    for age, (key, title, channel_key, body) in enumerate(DEMO_ITEMS):
        ensure_item(db, key, title, channel_key, now - timedelta(hours=age), body)

def main():
    logging.basicConfig(level=logging.INFO)
    init_db()
    db = SessionLocal()
    try:
        seed(db)
        logger.info("Seeded %d channels and %d items", len(DEMO_CHANNELS), len(DEMO_ITEMS))
    finally:
        db.close()

if __name__ == "__main__":
    main()
