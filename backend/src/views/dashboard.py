"""
Dashboard screen: the signed-in user's saved links.

States are `loading` (list fetch not finished), then `empty` or `populated`.
`submitting` is independent and gates the save button while a create is in
flight. After the first load the list is a local cache: creates and deletes
patch it in place and nothing is re-fetched until the screen is entered again.
"""
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from urllib.parse import urlparse

from schemas.auth import AuthState, Authenticated
from schemas.link import Link
from services import link_service
from services.exceptions import BackendError, LinkValidationError
from services.session_context import SessionContext
from views.notices import Notice, NoticeHolder

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"


class DashboardStatus(StrEnum):
    """What the link list area shows."""

    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"


def display_label(link: Link) -> str:
    """Title if present, else the hostname without `www.`, else the raw URL."""
    if link.title:
        return link.title
    return hostname_of(link.url)


def hostname_of(url: str) -> str:
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return url
    if not hostname:
        return url
    return hostname.removeprefix("www.")


def format_saved_on(created_at: datetime) -> str:
    """
    Format as e.g. `Jan 5, 2024`.

    The server does not know the browser's time zone, so the date is the UTC
    calendar date. Naive timestamps are taken as UTC.
    """
    if created_at.tzinfo is not None:
        created_at = created_at.astimezone(UTC)
    return f"{created_at:%b} {created_at.day}, {created_at.year}"


def count_label(count: int) -> str:
    """E.g. `0 links saved`, `1 link saved`."""
    noun = "link" if count == 1 else "links"
    return f"{count} {noun} saved"


@dataclass(frozen=True)
class LinkRow:
    """Render-ready view of one link."""

    id: str
    url: str
    label: str
    saved_on: str

    @property
    def href(self) -> str | None:
        """Link target; only http(s) URLs are rendered as anchors."""
        try:
            scheme = urlparse(self.url).scheme
        except ValueError:
            return None
        if scheme.lower() in ("http", "https"):
            return self.url
        return None

    @classmethod
    def from_link(cls, link: Link) -> "LinkRow":
        return cls(
            id=link.id,
            url=link.url,
            label=display_label(link),
            saved_on=format_saved_on(link.created_at),
        )


@dataclass
class LinkForm:
    """Current contents of the "save a new link" form."""

    url: str = ""
    title: str = ""

    def clear(self) -> None:
        self.url = ""
        self.title = ""


class DashboardView(NoticeHolder):
    """State machine behind the dashboard page."""

    def __init__(self, context: SessionContext) -> None:
        self._context = context
        self._links: list[Link] = []
        self._loading = True
        self._loaded_for: str | None = None
        self._unsubscribe: Callable[[], None] | None = None
        self.submitting = False
        self.form = LinkForm()
        self.notice = None

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    @property
    def status(self) -> DashboardStatus:
        if self._loading:
            return DashboardStatus.LOADING
        if not self._links:
            return DashboardStatus.EMPTY
        return DashboardStatus.POPULATED

    @property
    def links(self) -> list[Link]:
        """Cached links, newest first."""
        return list(self._links)

    @property
    def rows(self) -> list[LinkRow]:
        return [LinkRow.from_link(link) for link in self._links]

    @property
    def count_label(self) -> str:
        return count_label(len(self._links))

    @property
    def greeting_name(self) -> str:
        user = self._context.user
        return user.greeting_name if user else ""

    @property
    def redirect_to(self) -> str | None:
        """Where to send the browser instead of rendering the dashboard."""
        if self._context.user is None:
            return LOGIN_PATH
        return None

    @property
    def can_submit(self) -> bool:
        return not self.submitting and bool(self.form.url.strip())

    async def mount(self) -> None:
        """Subscribe to session changes and load the list."""
        if not self.mounted:
            self._unsubscribe = self._context.subscribe(self._on_session_change)
        await self.load()

    async def ensure_loaded(self) -> None:
        """Mount if needed, and load the list if it is not loaded for the current user."""
        if not self.mounted:
            await self.mount()
        elif self._loading:
            await self.load()

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def load(self) -> None:
        """Fetch the user's links. A failed fetch shows an empty list and a notice."""
        user = self._context.user
        if user is None:
            return

        self._loading = True
        try:
            self._links = await link_service.list_links(self._context.client, user.id)
        except BackendError as e:
            logger.exception("Error fetching links")
            self._links = []
            self.notice = Notice.error(str(e))
        finally:
            self._loading = False
            self._loaded_for = user.id

    async def create(self, url: str, title: str = "") -> bool:
        """
        Save a link and put it at the head of the list.

        Blocked without a network call when signed out, when the URL is blank,
        or while another create is in flight. The form keeps its values when the
        save fails and is cleared when it succeeds.
        """
        user = self._context.user
        if user is None or self.submitting:
            return False
        self.form.url = url
        self.form.title = title
        if not url.strip():
            self.notice = Notice.error("URL is required")
            return False

        self.submitting = True
        try:
            link = await link_service.create_link(self._context.client, user.id, url, title)
        except (BackendError, LinkValidationError) as e:
            logger.exception("Error saving link")
            self.notice = Notice.error(str(e))
            return False
        finally:
            self.submitting = False

        self._links.insert(0, link)
        self.form.clear()
        return True

    async def delete(self, link_id: str) -> bool:
        """
        Delete a link shown in the list.

        The row is removed only after the backend confirms; unknown ids are
        ignored without a network call.
        """
        if self._context.user is None:
            return False
        if not any(link.id == link_id for link in self._links):
            return False

        try:
            await link_service.delete_link(self._context.client, link_id)
        except BackendError as e:
            logger.exception("Error deleting link")
            self.notice = Notice.error(str(e))
            return False

        self._links = [link for link in self._links if link.id != link_id]
        return True

    def _on_session_change(self, state: AuthState) -> None:
        if not isinstance(state, Authenticated):
            # signed out: drop the cache, the next render redirects to login
            self._reset()
        elif state.user.id != self._loaded_for:
            self._reset()

    def _reset(self) -> None:
        self._links = []
        self._loading = True
        self._loaded_for = None
        self.form.clear()
        self.notice = None
