from fastapi import Query, Request
from pydantic import BaseModel, ConfigDict
from typing import Mapping

from .paging import resolve_offset
from .schemas import RouteKind

FULL_PAGE_TEMPLATE = "home.html"
FRAGMENT_TEMPLATES = {
    RouteKind.HOME: "items.html",
    RouteKind.POST: "main.html",
    RouteKind.SEARCH: "items.html",
    RouteKind.CHANNEL: "items.html",
}

def is_fragment_request(headers: Mapping[str, str]) -> bool:
    """True for in-page asynchronous requests (``X-Requested-With: XMLHttpRequest``)."""
    return (headers.get("X-Requested-With") or "").lower() == "xmlhttprequest"

def select_template(is_fragment: bool, kind: RouteKind) -> str:
    if is_fragment:
        return FRAGMENT_TEMPLATES[kind]
    # The post page reuses the home shell with the post as primary content
    return FULL_PAGE_TEMPLATE

class RequestContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_fragment: bool = False
    offset: int = 0

    def template_for(self, kind: RouteKind) -> str:
        return select_template(self.is_fragment, kind)

def request_context(request: Request, p: str | None = Query(None)) -> RequestContext:
    return RequestContext(is_fragment=is_fragment_request(request.headers), offset=resolve_offset(p))
