"""
Snippetbox — Snippet Route Handlers
====================================

What:  Home page, snippet view, and the snippet creation form.
How:   Thin handlers: bind → validate → SnippetService → flash + redirect,
       or re-render the form with errors (422).

Routes:
    GET  /                      latest snippets
    GET  /snippet/view/{id}     one snippet (404 for bad, unknown or expired ids)
    GET  /snippet/create        empty form             (login required)
    POST /snippet/create        create, 303 to view    (login required)
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.responses import Response

from snippetbox.auth import is_authenticated, require_authentication
from snippetbox.exceptions import NotFoundError
from snippetbox.forms import SnippetCreateForm, bind_form, parse_int
from snippetbox.services.snippet_service import SnippetService, get_snippet_service
from snippetbox.sessions import SessionManager, get_session_manager
from snippetbox.templating import new_template_data, render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Snippets"])

snippet_create_form = bind_form(SnippetCreateForm)


@router.get("/", response_class=HTMLResponse, summary="Latest snippets")
async def home(
    request: Request,
    snippets: SnippetService = Depends(get_snippet_service),
    sessions: SessionManager = Depends(get_session_manager),
    authenticated: bool = Depends(is_authenticated),
) -> Response:
    latest = await snippets.latest()
    data = new_template_data(request, sessions, authenticated, snippets=latest)
    return render(request, 200, "home.html", data)


@router.get("/snippet/view/{snippet_id}", response_class=HTMLResponse, summary="View a snippet")
async def snippet_view(
    snippet_id: str,
    request: Request,
    snippets: SnippetService = Depends(get_snippet_service),
    sessions: SessionManager = Depends(get_session_manager),
    authenticated: bool = Depends(is_authenticated),
) -> Response:
    """
    The id is taken as a string and parsed here so that "abc" or "-1"
    answer 404 like an unknown id, rather than FastAPI's 422.
    """
    try:
        parsed_id = parse_int(snippet_id)
    except ValueError:
        raise NotFoundError(resource="snippet", resource_id=snippet_id)
    if parsed_id < 1:
        raise NotFoundError(resource="snippet", resource_id=snippet_id)

    snippet = await snippets.get(parsed_id)

    data = new_template_data(request, sessions, authenticated, snippet=snippet)
    return render(request, 200, "view.html", data)


@router.get(
    "/snippet/create",
    response_class=HTMLResponse,
    dependencies=[Depends(require_authentication)],
    summary="Snippet creation form",
)
async def snippet_create(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager),
    authenticated: bool = Depends(is_authenticated),
) -> Response:
    form = SnippetCreateForm(expires=365)
    data = new_template_data(request, sessions, authenticated, form=form)
    return render(request, 200, "create.html", data)


@router.post(
    "/snippet/create",
    response_class=HTMLResponse,
    dependencies=[Depends(require_authentication)],
    summary="Create a snippet",
)
async def snippet_create_post(
    request: Request,
    form: SnippetCreateForm = Depends(snippet_create_form),
    snippets: SnippetService = Depends(get_snippet_service),
    sessions: SessionManager = Depends(get_session_manager),
    authenticated: bool = Depends(is_authenticated),
) -> Response:
    if not form.validate():
        data = new_template_data(request, sessions, authenticated, form=form)
        return render(request, 422, "create.html", data)

    snippet_id = await snippets.insert(form.title, form.content, form.expires)

    sessions.put(request, "flash", "Snippet successfully created!")
    return RedirectResponse(f"/snippet/view/{snippet_id}", status_code=303)
