"""
Snippetbox — User Route Handlers
=================================

What:  Signup, login and logout.

Routes:
    GET  /user/signup    empty signup form
    POST /user/signup    create account, flash, 303 to /user/login
    GET  /user/login     empty login form
    POST /user/login     authenticate, renew token, 303 to /snippet/create
    POST /user/logout    renew token, forget user, flash, 303 to /   (login required)

Failures after validation become validator errors, never 500s:
    duplicate email   → field error on "email"
    bad credentials   → non-field error (does not say which field was wrong)
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.responses import Response

from snippetbox.auth import AUTH_SESSION_KEY, is_authenticated, require_authentication
from snippetbox.exceptions import DuplicateEmailError, InvalidCredentialsError
from snippetbox.forms import UserLoginForm, UserSignupForm, bind_form
from snippetbox.services.user_service import UserService, get_user_service
from snippetbox.sessions import SessionManager, get_session_manager
from snippetbox.templating import new_template_data, render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["Users"])

signup_form = bind_form(UserSignupForm)
login_form = bind_form(UserLoginForm)


@router.get("/signup", response_class=HTMLResponse, summary="Signup form")
async def user_signup(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager),
    authenticated: bool = Depends(is_authenticated),
) -> Response:
    data = new_template_data(request, sessions, authenticated, form=UserSignupForm())
    return render(request, 200, "signup.html", data)


@router.post("/signup", response_class=HTMLResponse, summary="Create an account")
async def user_signup_post(
    request: Request,
    form: UserSignupForm = Depends(signup_form),
    users: UserService = Depends(get_user_service),
    sessions: SessionManager = Depends(get_session_manager),
    authenticated: bool = Depends(is_authenticated),
) -> Response:
    if not form.validate():
        data = new_template_data(request, sessions, authenticated, form=form)
        return render(request, 422, "signup.html", data)

    try:
        await users.insert(form.name, form.email, form.password)
    except DuplicateEmailError as e:
        form.validator.add_field_error("email", e.message)
        data = new_template_data(request, sessions, authenticated, form=form)
        return render(request, 422, "signup.html", data)

    sessions.put(request, "flash", "Your signup was successful. Please log in.")
    return RedirectResponse("/user/login", status_code=303)


@router.get("/login", response_class=HTMLResponse, summary="Login form")
async def user_login(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager),
    authenticated: bool = Depends(is_authenticated),
) -> Response:
    data = new_template_data(request, sessions, authenticated, form=UserLoginForm())
    return render(request, 200, "login.html", data)


@router.post("/login", response_class=HTMLResponse, summary="Log in")
async def user_login_post(
    request: Request,
    form: UserLoginForm = Depends(login_form),
    users: UserService = Depends(get_user_service),
    sessions: SessionManager = Depends(get_session_manager),
    authenticated: bool = Depends(is_authenticated),
) -> Response:
    if not form.validate():
        data = new_template_data(request, sessions, authenticated, form=form)
        return render(request, 422, "login.html", data)

    try:
        user_id = await users.authenticate(form.email, form.password)
    except InvalidCredentialsError as e:
        logger.info("Failed login attempt")
        form.validator.add_non_field_error(e.message)
        data = new_template_data(request, sessions, authenticated, form=form)
        return render(request, 422, "login.html", data)

    sessions.renew_token(request)
    sessions.put(request, AUTH_SESSION_KEY, user_id)
    return RedirectResponse("/snippet/create", status_code=303)


@router.post(
    "/logout",
    dependencies=[Depends(require_authentication)],
    summary="Log out",
)
async def user_logout_post(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager),
) -> Response:
    sessions.renew_token(request)
    sessions.remove(request, AUTH_SESSION_KEY)
    sessions.put(request, "flash", "You've been logged out successfully!")
    return RedirectResponse("/", status_code=303)
