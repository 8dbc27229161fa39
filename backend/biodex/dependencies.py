"""
Biodex Backend — Request Dependencies
=======================================

What:  FastAPI dependencies shared by the protected routers.

Viewer identity:
    The viewer is passed explicitly in the X-Viewer-ID header on every
    /api call. Sign-in and cookies live in front of this service; by the
    time a request arrives here the identity is just a string that gets
    compared with `author`.
"""

from fastapi import Header

from biodex.exceptions import UnauthenticatedError

VIEWER_HEADER = "X-Viewer-ID"


async def get_viewer_id(
    x_viewer_id: str | None = Header(default=None, alias=VIEWER_HEADER),
) -> str:
    """Protected-route gate: rejects requests that carry no viewer identity."""
    viewer_id = (x_viewer_id or "").strip()
    if not viewer_id:
        raise UnauthenticatedError()
    return viewer_id
