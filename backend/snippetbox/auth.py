"""
Snippetbox — Authentication Dependencies
=========================================

What:  Decides whether the current request belongs to a logged-in user.
How:   The session key `authenticatedUserID` is set on login and removed on
       logout. It only counts while the user row still exists, so deleting
       an account logs it out everywhere on the next request.
Who:   `is_authenticated` feeds the nav bar on every page;
       `require_authentication` guards snippet creation and logout.
"""

from fastapi import Depends, Request

from snippetbox.exceptions import AuthenticationRequired
from snippetbox.services.user_service import UserService, get_user_service
from snippetbox.sessions import SessionManager, get_session_manager

AUTH_SESSION_KEY = "authenticatedUserID"


async def is_authenticated(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager),
    users: UserService = Depends(get_user_service),
) -> bool:
    user_id = sessions.get_int(request, AUTH_SESSION_KEY)
    if user_id == 0:
        return False
    return await users.exists(user_id)


async def require_authentication(
    request: Request,
    authenticated: bool = Depends(is_authenticated),
) -> bool:
    """
    Raise AuthenticationRequired (→ 303 to /user/login) for anonymous users.

    Authenticated responses are marked `no-store` so pages that require a
    login are not served from a shared or browser cache after logout.
    """
    if not authenticated:
        raise AuthenticationRequired(path=request.url.path)
    request.state.no_store = True
    return True
