"""Backend-agnostic query vocabulary for the item collection."""
from pydantic import BaseModel, ConfigDict
from typing import Optional, Tuple

FILTER_FIELDS = ("key", "channel_key")
SORT_FIELDS = ("date",)

class ItemQuery(BaseModel):
    """Immutable filter/sort/skip/limit description of an item fetch.

    Every builder method returns a new query, so a partially built query can
    be shared between routes.
    """
    model_config = ConfigDict(frozen=True)

    filters: Tuple[Tuple[str, str], ...] = ()
    text: Optional[str] = None
    order: Tuple[str, ...] = ()
    offset: int = 0
    max_rows: Optional[int] = None

    def where(self, field: str, value: str) -> "ItemQuery":
        if field not in FILTER_FIELDS:
            raise ValueError(f"cannot filter items on {field!r}")
        return self.model_copy(update={"filters": self.filters + ((field, value),)})

    def search(self, text: str) -> "ItemQuery":
        return self.model_copy(update={"text": text})

    def sort(self, field: str) -> "ItemQuery":
        """Add a sort key; a leading ``-`` means descending."""
        if field.lstrip("-") not in SORT_FIELDS:
            raise ValueError(f"cannot sort items on {field!r}")
        return self.model_copy(update={"order": self.order + (field,)})

    def skip(self, n: int) -> "ItemQuery":
        if n < 0:
            raise ValueError("skip must be non-negative")
        return self.model_copy(update={"offset": n})

    def limit(self, n: int) -> "ItemQuery":
        if n < 1:
            raise ValueError("limit must be positive")
        return self.model_copy(update={"max_rows": n})

def items() -> ItemQuery:
    return ItemQuery()
