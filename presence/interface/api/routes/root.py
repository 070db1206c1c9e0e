"""Root route describing the API."""

from fastapi import APIRouter, Depends

from presence.interface.api.caching import ROOT_MAX_AGE, cache_control

router = APIRouter(tags=["root"])

ROUTES = {
    "hello!": "welcome to the user api",
    "here are our routes": {
        "/": "root page",
        "/users": "a summary of all the available users",
        "/user": (
            "the information about a specific user, "
            "if the site is being accessed from a user's domain"
        ),
        "/user/<username>": "the information about a specific user",
    },
}


@router.get("/", dependencies=[Depends(cache_control(ROOT_MAX_AGE))])
async def root() -> dict:
    """List the available routes."""
    return ROUTES
