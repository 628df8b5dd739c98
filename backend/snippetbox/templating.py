"""
Snippetbox — HTML Rendering
============================

What:  Jinja2 environment, custom filters and the shared template context.
How:   Starlette's Jinja2Templates loads pages from `ui/html`; every page
       extends `base.html` and includes `partials/nav.html`.
Who:   Route handlers call `render(...)` with data from `new_template_data`.

Template context keys:
    current_year      footer copyright year
    flash             one-time message popped from the session ("" if none)
    is_authenticated  controls the nav links
    form              form record being (re-)displayed, errors included
    snippet/snippets  page payloads
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from starlette.requests import Request
from starlette.responses import Response
from fastapi.templating import Jinja2Templates

from snippetbox.sessions import SessionManager

UI_DIR = Path(__file__).resolve().parent / "ui"
TEMPLATES_DIR = UI_DIR / "html"
STATIC_DIR = UI_DIR / "static"


def human_date(value: Optional[datetime]) -> str:
    """Format a timestamp as UTC "02 Jan 2024 at 15:04"; None renders as ""."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%d %b %Y at %H:%M")


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["human_date"] = human_date


def new_template_data(
    request: Request,
    sessions: SessionManager,
    is_authenticated: bool,
    **extra: Any,
) -> Dict[str, Any]:
    """
    Base context for a page render.

    Pops the flash message, so call it only on the code path that actually
    renders a page (not before a redirect).
    """
    data: Dict[str, Any] = {
        "current_year": datetime.now(timezone.utc).year,
        "flash": sessions.pop_string(request, "flash"),
        "is_authenticated": is_authenticated,
    }
    data.update(extra)
    return data


def render(request: Request, status_code: int, page: str, data: Dict[str, Any]) -> Response:
    """Render `pages/<page>` with `data`; a missing template propagates (500)."""
    return templates.TemplateResponse(
        request,
        f"pages/{page}",
        data,
        status_code=status_code,
    )
