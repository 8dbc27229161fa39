"""
Biodex Cards — DataStore Implementations
==========================================

What:  Two ways for a card to reach species data.

    HttpDataStore   talks to the REST API with httpx; the viewer identity
                    travels in the X-Viewer-ID header
    SqlDataStore    calls SpeciesService in-process with its own session
                    per operation (scripts, admin tooling, tests)

Both raise StoreError carrying the backend's own message, so the card can
show "species with ID '7' was not found" rather than a bare status code.
Neither retries: the user resubmits.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from biodex.cards.base import DataStore
from biodex.config import settings
from biodex.database import async_session_factory
from biodex.dependencies import VIEWER_HEADER
from biodex.exceptions import BiodexError, StoreError
from biodex.schemas.species import SpeciesForm, SpeciesRecord
from biodex.services.species_service import species_service

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Pull a user-facing message out of an API error body."""
    try:
        body = response.json()
    except ValueError:
        return f"Request failed with status {response.status_code}"

    if isinstance(body, dict):
        if body.get("message"):
            return str(body["message"])
        # Starlette's own errors (405, unknown route) carry a plain detail string
        detail = body.get("detail")
        if isinstance(detail, str):
            return detail
    return f"Request failed with status {response.status_code}"


class HttpDataStore(DataStore):
    """
    DataStore backed by the Biodex REST API.

    Usage:
        async with HttpDataStore(viewer_id="u1") as store:
            card = await RecordEditCard.load(store, 7, "u1", notifier, navigator)

    Pass `client` to share a connection pool (or an ASGI transport in tests);
    the store then leaves closing it to the caller.
    """

    def __init__(
        self,
        viewer_id: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.viewer_id = viewer_id
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.api_timeout,
        )
        self._headers = {VIEWER_HEADER: viewer_id}

    async def __aenter__(self) -> "HttpDataStore":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_record(self, record_id: int) -> SpeciesRecord:
        response = await self._send("GET", f"/api/species/{record_id}")
        try:
            return SpeciesRecord.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.warning("Species %s: unreadable response body: %s", record_id, str(e))
            raise StoreError(
                message="The species service sent an unreadable response.",
                status_code=response.status_code,
                context={"error_type": type(e).__name__},
            ) from e

    async def update_record(self, record_id: int, patch: Dict[str, Any]) -> None:
        await self._send("PATCH", f"/api/species/{record_id}", json=patch)

    async def delete_record(self, record_id: int) -> None:
        await self._send("DELETE", f"/api/species/{record_id}")

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, headers=self._headers, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, str(e))
            raise StoreError(
                message="Could not reach the species service. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        if response.is_error:
            message = _error_message(response)
            logger.info("%s %s rejected (%d): %s", method, url, response.status_code, message)
            raise StoreError(
                message=message,
                status_code=response.status_code,
                context={"request_id": response.headers.get("X-Request-ID", "")},
            )
        return response


class SqlDataStore(DataStore):
    """
    DataStore that runs SpeciesService directly.

    Each call opens its own session and commits it, mirroring the
    session-per-request dependency used by the routes.
    """

    def __init__(
        self,
        viewer_id: str,
        session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
    ):
        self.viewer_id = viewer_id
        self._session_factory = session_factory

    async def fetch_record(self, record_id: int) -> SpeciesRecord:
        async with self._session_factory() as session:
            try:
                return await species_service.get_species(session, record_id)
            except BiodexError as e:
                raise StoreError(message=e.message, context=e.context) from e

    async def update_record(self, record_id: int, patch: Dict[str, Any]) -> None:
        try:
            form = SpeciesForm.model_validate(patch)
        except PydanticValidationError as e:
            raise StoreError(message=str(e.errors()[0]["msg"])) from e

        async with self._session_factory() as session:
            try:
                await species_service.update_species(session, record_id, self.viewer_id, form)
                await session.commit()
            except BiodexError as e:
                await session.rollback()
                raise StoreError(message=e.message, context=e.context) from e
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Commit failed for species %s: %s", record_id, str(e))
                raise StoreError(message="The change could not be saved. Please try again.") from e

    async def delete_record(self, record_id: int) -> None:
        async with self._session_factory() as session:
            try:
                await species_service.delete_species(session, record_id, self.viewer_id)
                await session.commit()
            except BiodexError as e:
                await session.rollback()
                raise StoreError(message=e.message, context=e.context) from e
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Commit failed for species %s: %s", record_id, str(e))
                raise StoreError(message="The change could not be saved. Please try again.") from e
