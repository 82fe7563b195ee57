"""
models/message.py
-----------------
Domain models for geotagged messages and their comments.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Comment:
    """
    A comment left on a message.

    Attributes:
        content: Comment body.
        author_id: Opaque ID of the commenting user. Internal only,
            never part of ``to_dict()``.
        message_id: The parent message.
        id: Database primary key (None for new records).
        created_at: Timestamp when the record was created.
    """
    content: str
    author_id: str
    message_id: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "content": self.content,
            "created_at": self.created_at,
        }


@dataclass
class Message:
    """
    A message pinned to a WGS84 point.

    Attributes:
        text: Message body.
        author_id: Opaque ID of the posting user. Internal only,
            never part of ``to_dict()``.
        x: Longitude in degrees.
        y: Latitude in degrees.
        id: Database primary key (None for new records).
        created_at: Timestamp when the record was created.
        comments: Filled in by the find operations, empty otherwise.
    """
    text: str
    author_id: str
    x: float
    y: float
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    comments: list[Comment] = field(default_factory=list)

    def to_dict(self) -> dict:
        """External representation, without the author ID."""
        return {
            "id": self.id,
            "message": self.text,
            "x": self.x,
            "y": self.y,
            "created_at": self.created_at,
            "comments": [c.to_dict() for c in self.comments],
        }

    def __str__(self) -> str:
        return f"#{self.id} ({self.x:.5f}, {self.y:.5f}) {self.text}"
