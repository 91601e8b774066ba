"""Resolve each route kind into a bounded, ordered slice of content.

Route parameters arrive as the raw wildcard capture: the first character is
a mandatory separator and is stripped before use, so anything shorter than
two characters is rejected before the store is touched.
"""
import logging
from typing import List

from . import query
from .paging import PAGE_SIZE
from .schemas import ChannelLookup, ChannelOut, ItemOut, ResultBag, RouteKind
from .store import ContentStore, StoreError

logger = logging.getLogger(__name__)

class ContentNotFound(Exception):
    """Nothing to show; rendered as a 404 page carrying ``message``."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

def strip_separator(raw: str | None, message: str) -> str:
    if raw is None or len(raw) < 2:
        raise ContentNotFound(message)
    return raw[1:]

def _page(store: ContentStore, q: query.ItemQuery) -> List[ItemOut]:
    return store.find_items(q.limit(PAGE_SIZE))[:PAGE_SIZE]

def home(store: ContentStore, offset: int, site_title: str) -> ResultBag:
    channels = store.all_channels()
    posts = _page(store, query.items().sort("-date").skip(offset))
    if not posts:
        raise ContentNotFound("No Articles")
    return ResultBag(kind=RouteKind.HOME, title=site_title, post=posts[0], items=posts, channels=channels)

def post(store: ContentStore, raw_key: str | None) -> ResultBag:
    key = strip_separator(raw_key, "Invalid Channel")
    # Context list is always the most recent page, not the neighbours of this post
    posts = _page(store, query.items().sort("-date"))
    found = store.find_item(query.items().where("key", key).sort("-date"))
    channels = store.all_channels()
    # An unknown key still renders the page, just without a primary post
    title = found.title if found is not None else ""
    return ResultBag(kind=RouteKind.POST, title=title, post=found, items=posts, channels=channels)

def search(store: ContentStore, raw_query: str | None, offset: int) -> ResultBag:
    q = strip_separator(raw_query, "Query is too short. Please try a longer query.")
    channels = store.all_channels()
    # No explicit sort: ordering is whatever the store's text search yields
    posts = _page(store, query.items().search(q).skip(offset))
    if not posts:
        raise ContentNotFound(f"No Articles for query '{q}'")
    return ResultBag(kind=RouteKind.SEARCH, title=q, header=q, post=posts[0], items=posts, channels=channels)

def channel(store: ContentStore, raw_key: str | None, offset: int) -> ResultBag:
    key = strip_separator(raw_key, "Channel Not Found")
    posts = _page(store, query.items().where("channel_key", key).sort("-date").skip(offset))
    if not posts:
        raise ContentNotFound("No Articles")

    channels = store.all_channels()

    lookup = ChannelLookup.FOUND
    try:
        current = store.find_channel(key)
    except StoreError as exc:
        logger.warning("channel lookup for %r failed, rendering without metadata: %s", key, exc)
        current = ChannelOut()
        lookup = ChannelLookup.FAILED
    else:
        if current is None:
            raise ContentNotFound("Channel not found")

    return ResultBag(
        kind=RouteKind.CHANNEL,
        title=current.title,
        header=current.title,
        post=posts[0],
        items=posts,
        channels=channels,
        channel=current,
        channel_lookup=lookup,
    )
