"""Navigation Routes — root redirect and logout.

Invariants:
    - GET / redirects to the listing
    - GET /logout always answers 401 so the browser forgets cached Basic credentials;
      it needs no authentication itself
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from board.api.rendering import templates
from board.api.routes.posts import POSTS_PATH

router = APIRouter(tags=["navigation"])


@router.get("/")
async def index():
    return RedirectResponse(POSTS_PATH, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/logout")
async def logout(request: Request):
    """Show the logged-out page with a 401 status."""
    return templates.TemplateResponse(
        request,
        "logout.html",
        {"posts_path": POSTS_PATH},
        status_code=status.HTTP_401_UNAUTHORIZED,
    )
