import html
import pathlib

from fastapi import Request
from fastapi.templating import Jinja2Templates
from markupsafe import Markup, escape

ENCODED_CONTENT_MARKERS = ("content:encoded>", "content/:encoded>")

def proper_html(text: str | None) -> Markup:
    """Normalize stored feed text into markup for raw interpolation.

    Text carrying an RSS ``content:encoded`` marker was escaped upstream and
    gets one unescape first. Everything then goes through escape + unescape,
    which folds malformed or double-escaped entities into one representation.

    This is entity normalization, not an XSS sanitizer: tags and scripts in
    the stored content survive and are emitted as markup.
    """
    if not text:
        return Markup("")
    if any(marker in text for marker in ENCODED_CONTENT_MARKERS):
        text = html.unescape(text)
    return Markup(escape(text).unescape())

templates = Jinja2Templates(directory=str(pathlib.Path(__file__).parent / "templates"))
templates.env.filters["html"] = proper_html

def render(request: Request, name: str, ctx: dict, status_code: int = 200):
    return templates.TemplateResponse(request, name, ctx, status_code=status_code)
