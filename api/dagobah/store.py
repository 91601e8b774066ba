"""Content store access.

The dispatcher only talks to :class:`ContentStore`; :class:`SqlContentStore`
is the SQLAlchemy implementation used by the running app.
"""
import logging
from typing import List, Optional, Protocol

from sqlalchemy import select, desc, asc, func, or_, and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import Item, Channel
from .query import ItemQuery
from .schemas import ItemOut, ChannelOut

logger = logging.getLogger(__name__)

class StoreError(Exception):
    """The content store could not answer a query."""

class ContentStore(Protocol):
    def find_items(self, query: ItemQuery) -> List[ItemOut]: ...

    def find_item(self, query: ItemQuery) -> Optional[ItemOut]: ...

    def find_channel(self, key: str) -> Optional[ChannelOut]: ...

    def all_channels(self) -> List[ChannelOut]: ...

_COLUMNS = {
    "key": Item.key,
    "channel_key": Item.channel_key,
    "date": Item.date,
}

class SqlContentStore:
    def __init__(self, db: Session):
        self.db = db

    def _text_clause(self, text: str):
        if self.db.get_bind().dialect.name == "postgresql":
            document = func.coalesce(Item.title, "") + " " + func.coalesce(Item.content, "")
            return func.to_tsvector("english", document).bool_op("@@")(
                func.plainto_tsquery("english", text)
            )
        # Other backends: every term has to show up in the title or the body
        terms = text.split() or [text]
        return and_(*[
            or_(Item.title.icontains(t, autoescape=True), Item.content.icontains(t, autoescape=True))
            for t in terms
        ])

    def _statement(self, query: ItemQuery):
        stmt = select(Item)
        for field, value in query.filters:
            stmt = stmt.where(_COLUMNS[field] == value)
        if query.text is not None:
            stmt = stmt.where(self._text_clause(query.text))
        for field in query.order:
            column = _COLUMNS[field.lstrip("-")]
            stmt = stmt.order_by(desc(column) if field.startswith("-") else asc(column))
        if query.offset:
            stmt = stmt.offset(query.offset)
        if query.max_rows is not None:
            stmt = stmt.limit(query.max_rows)
        return stmt

    def find_items(self, query: ItemQuery) -> List[ItemOut]:
        logger.debug("item query %r", query)
        try:
            rows = self.db.execute(self._statement(query)).scalars().all()
        except SQLAlchemyError as exc:
            raise StoreError(f"item query failed: {exc}") from exc
        return [ItemOut.model_validate(r) for r in rows]

    def find_item(self, query: ItemQuery) -> Optional[ItemOut]:
        found = self.find_items(query.limit(1))
        return found[0] if found else None

    def find_channel(self, key: str) -> Optional[ChannelOut]:
        try:
            row = self.db.execute(select(Channel).where(Channel.key == key)).scalars().first()
        except SQLAlchemyError as exc:
            raise StoreError(f"channel lookup for {key!r} failed: {exc}") from exc
        return ChannelOut.model_validate(row) if row else None

    def all_channels(self) -> List[ChannelOut]:
        try:
            rows = self.db.execute(select(Channel).order_by(Channel.title)).scalars().all()
        except SQLAlchemyError as exc:
            raise StoreError(f"channel listing failed: {exc}") from exc
        return [ChannelOut.model_validate(r) for r in rows]
