"""Post Routes — the two board entry points: /posts and /posts/delete.

Invariants:
    - Both entry points accept every routed method; anything but the flow's own
      method is a MalformedRequestError (400), never a 405
    - The tracking identifier is ensured before method dispatch, and a newly issued
      cookie is attached to whatever response the flow produces, rejections included
      (the jar rides on request.state for the error handler)
    - Successful writes answer 303 See Other -> /posts
    - Routes never contain business logic (delegate to PostCoordinator)
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse, Response

from board.api.dependencies import get_current_user, get_post_coordinator
from board.api.rendering import templates
from board.api.request_body import read_body
from board.config import Settings, get_settings
from board.core.domain_types import HttpMethod, ROUTED_METHODS, UserIdentity
from board.core.errors import MalformedRequestError
from board.services.cookie_jar import ResponseCookieJar
from board.services.post_coordinator import PostCoordinator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/posts", tags=["posts"])

POSTS_PATH = "/posts"


def _redirect_to_posts() -> Response:
    return RedirectResponse(POSTS_PATH, status_code=status.HTTP_303_SEE_OTHER)


@router.api_route("", methods=ROUTED_METHODS)
async def handle_posts(
    request: Request,
    user: UserIdentity = Depends(get_current_user),
    coordinator: PostCoordinator = Depends(get_post_coordinator),
    settings: Settings = Depends(get_settings),
):
    """List posts (GET) or create one (POST)."""
    cookies = ResponseCookieJar(request.cookies)
    request.state.cookie_jar = cookies
    tracking = coordinator.ensure_tracking(cookies, user)
    match request.method:
        case HttpMethod.GET:
            page = await coordinator.list_posts(user)
            response = templates.TemplateResponse(
                request,
                "posts.html",
                {
                    "posts": page.posts,
                    "user": page.user,
                    "one_time_token": page.one_time_token,
                    "viewer_is_admin": page.viewer_is_admin,
                },
            )
            logger.info(
                "Posts viewed",
                extra={
                    "user": user,
                    "user_agent": request.headers.get("user-agent"),
                    "tracking_id": tracking.serialize(),
                    "remote_address": request.client.host if request.client else None,
                },
            )
        case HttpMethod.POST:
            body = await read_body(request, settings.max_body_bytes)
            await coordinator.create_post(user, tracking, body)
            response = _redirect_to_posts()
        case _:
            raise MalformedRequestError(f"Unsupported method {request.method} on /posts")
    return cookies.apply(response)


@router.api_route("/delete", methods=ROUTED_METHODS)
async def handle_delete_post(
    request: Request,
    user: UserIdentity = Depends(get_current_user),
    coordinator: PostCoordinator = Depends(get_post_coordinator),
    settings: Settings = Depends(get_settings),
):
    """Delete a post (POST only)."""
    cookies = ResponseCookieJar(request.cookies)
    request.state.cookie_jar = cookies
    coordinator.ensure_tracking(cookies, user)
    match request.method:
        case HttpMethod.POST:
            body = await read_body(request, settings.max_body_bytes)
            await coordinator.delete_post(user, body)
            logger.info(
                "Post deletion served",
                extra={
                    "user": user,
                    "user_agent": request.headers.get("user-agent"),
                    "remote_address": request.client.host if request.client else None,
                },
            )
            response = _redirect_to_posts()
        case _:
            raise MalformedRequestError(
                f"Unsupported method {request.method} on /posts/delete",
            )
    return cookies.apply(response)
