from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

class RouteKind(str, Enum):
    HOME = "home"
    POST = "post"
    SEARCH = "search"
    CHANNEL = "channel"

class ChannelLookup(str, Enum):
    """Outcome of the channel metadata lookup on the channel route."""
    SKIPPED = "skipped"
    FOUND = "found"
    FAILED = "failed"

class ItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    key: str
    title: str = ""
    channel_key: Optional[str] = None
    date: Optional[datetime] = None
    content: Optional[str] = ""

class ChannelOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    key: str = ""
    title: str = ""

class ResultBag(BaseModel):
    """Everything a page template needs for one request."""
    kind: RouteKind
    title: str = ""
    header: Optional[str] = None
    post: Optional[ItemOut] = None
    items: List[ItemOut] = Field(default_factory=list)
    channels: List[ChannelOut] = Field(default_factory=list)
    channel: Optional[ChannelOut] = None
    channel_lookup: ChannelLookup = ChannelLookup.SKIPPED

    def context(self) -> dict:
        # Shallow: templates receive the models themselves
        return dict(self)
