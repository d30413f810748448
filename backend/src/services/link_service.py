"""Service layer for link CRUD against the remote `links` table."""
import logging
from typing import Any

import httpx
from postgrest.exceptions import APIError
from pydantic import ValidationError

from schemas.link import Link, LinkCreate
from services.exceptions import BackendError, LinkValidationError

logger = logging.getLogger(__name__)

LINKS_TABLE = "links"


def _error_message(exc: Exception) -> str:
    message = getattr(exc, "message", None)
    return message or str(exc) or exc.__class__.__name__


async def list_links(client: Any, user_id: str) -> list[Link]:
    """
    Fetch all links owned by a user, newest first.

    Returns an empty list when the user has no links.

    Raises:
        BackendError: On transport or authorization failure.
    """
    try:
        response = await (
            client.table(LINKS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
    except (APIError, httpx.HTTPError) as e:
        raise BackendError(f"Could not load links: {_error_message(e)}") from e

    return [Link.model_validate(row) for row in response.data or []]


async def create_link(
    client: Any,
    user_id: str,
    url: str,
    title: str | None = None,
) -> Link:
    """
    Insert one link owned by `user_id`.

    The URL and title are trimmed; an empty title is stored as absent.

    Raises:
        LinkValidationError: If the URL is empty after trimming.
        BackendError: If the backend rejects the insert or returns no row.
    """
    try:
        data = LinkCreate(url=url, title=title)
    except ValidationError as e:
        raise LinkValidationError("URL is required") from e

    try:
        response = await (
            client.table(LINKS_TABLE)
            .insert({"user_id": user_id, "url": data.url, "title": data.title})
            .execute()
        )
    except (APIError, httpx.HTTPError) as e:
        raise BackendError(f"Could not save link: {_error_message(e)}") from e

    if not response.data:
        raise BackendError("Could not save link: backend returned no row")
    link = Link.model_validate(response.data[0])
    logger.info("Created link %s for user %s", link.id, user_id)
    return link


async def delete_link(client: Any, link_id: str) -> None:
    """
    Delete one link by id.

    Ownership is enforced by the backend's row-level policies.

    Raises:
        BackendError: On transport or authorization failure.
    """
    try:
        await client.table(LINKS_TABLE).delete().eq("id", link_id).execute()
    except (APIError, httpx.HTTPError) as e:
        raise BackendError(f"Could not delete link: {_error_message(e)}") from e
    logger.info("Deleted link %s", link_id)
