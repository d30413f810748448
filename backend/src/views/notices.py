"""Inline notices shown above a form or list."""
from dataclasses import dataclass
from enum import StrEnum


class NoticeLevel(StrEnum):
    """Severity of a notice, used for styling."""

    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notice:
    """A single message for the user."""

    level: NoticeLevel
    message: str

    @classmethod
    def error(cls, message: str) -> "Notice":
        return cls(NoticeLevel.ERROR, message)

    @classmethod
    def info(cls, message: str) -> "Notice":
        return cls(NoticeLevel.INFO, message)


class NoticeHolder:
    """
    Mixin for views that show at most one notice.

    Rendering takes the notice, so it is shown once.
    """

    notice: Notice | None = None

    def take_notice(self) -> Notice | None:
        notice, self.notice = self.notice, None
        return notice

    def dismiss(self) -> None:
        self.notice = None
