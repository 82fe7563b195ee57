"""
services/message_service.py
----------------------------
Business logic in front of the MessageRepository.
The repository stores whatever it is given; input checks live here.
"""

from models.message import Comment, Message
from repositories.message_repo import MessageRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class ValidationError(ValueError):
    """Raised when caller input is rejected before reaching the database."""


def _require_text(value: str, name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} must not be empty")
    return value


def _require_point(x: float, y: float) -> tuple[float, float]:
    try:
        x, y = float(x), float(y)
    except (TypeError, ValueError):
        raise ValidationError(f"coordinates must be numbers, got ({x!r}, {y!r})")
    if not -180.0 <= x <= 180.0:
        raise ValidationError(f"longitude out of range: {x}")
    if not -90.0 <= y <= 90.0:
        raise ValidationError(f"latitude out of range: {y}")
    return x, y


class MessageService:
    """
    Validates input for the message board and delegates to the repository.

    Store errors from the repository are not caught here.
    """

    def __init__(self, repo: MessageRepository):
        self.repo = repo

    def post_message(self, author_id: str, text: str, x: float, y: float) -> Message:
        """Validate and persist a new message at (x, y)."""
        _require_text(author_id, "author_id")
        _require_text(text, "text")
        x, y = _require_point(x, y)
        return self.repo.create_message(Message(text=text, author_id=author_id, x=x, y=y))

    def add_comment(self, message_id: int, author_id: str, content: str) -> Comment:
        """Validate and persist a comment on `message_id`."""
        _require_text(author_id, "author_id")
        _require_text(content, "content")
        if isinstance(message_id, bool) or not isinstance(message_id, int) or message_id <= 0:
            raise ValidationError(f"invalid message id: {message_id!r}")
        return self.repo.create_comment(message_id, Comment(content=content, author_id=author_id))

    def messages_near(self, x: float, y: float) -> list[Message]:
        x, y = _require_point(x, y)
        return self.repo.find_messages_near(x, y)

    def messages_for_user(self, user_id: str) -> list[Message]:
        _require_text(user_id, "user_id")
        return self.repo.find_messages_by_user(user_id)
