"""
repositories/message_repo.py
-----------------------------
Data access layer for geotagged messages and their comments.
All SQL queries related to the `messages` and `comments` tables live here.
"""

from config import NEAR_RADIUS_METERS
from db.connection import rollback_quietly
from models.message import Comment, Message
from utils.logger import get_logger

logger = get_logger(__name__)

# Geography point from bound (longitude, latitude) parameters.
_POINT_SQL = "ST_SetSRID(ST_MakePoint(%s, %s), 4326)::geography"

_MESSAGE_COLUMNS = (
    "m.id, m.message, ST_X(m.location::geometry), ST_Y(m.location::geometry), "
    "m.user_id, m.created_at"
)

_COMMENT_COLUMNS = "id, message_id, content, user_id, created_at"


class MessageRepository:
    """
    Repository for messages and comments.

    The pool is injected once and never reassigned. Each operation borrows
    one connection from it and hands it back when done.
    """

    def __init__(self, db_pool, radius_meters: float = NEAR_RADIUS_METERS):
        """
        Args:
            db_pool: A psycopg2 connection pool (anything with
                ``getconn()`` / ``putconn(conn)``).
            radius_meters: Search radius for ``find_messages_near``.
        """
        self._pool = db_pool
        self.radius_meters = radius_meters

    # ── CREATE ────────────────────────────────────────────

    def create_message(self, message: Message) -> Message:
        """
        Insert a new message.

        Args:
            message: Message with `text`, `author_id`, `x` and `y` set.

        Returns:
            The same Message with its `id` and `created_at` populated.
        """
        sql = f"""
            INSERT INTO messages (message, location, user_id)
            VALUES (%s, {_POINT_SQL}, %s)
            RETURNING id, created_at;
        """
        conn = self._pool.getconn()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (message.text, message.x, message.y, message.author_id))
                row = cur.fetchone()
                message.id = row[0]
                message.created_at = row[1]
            conn.commit()
            message.comments = []
            logger.info(f"Added message #{message.id} at ({message.x}, {message.y})")
            return message
        except Exception as e:
            rollback_quietly(conn)
            logger.error(f"Failed to add message: {e}")
            raise
        finally:
            self._pool.putconn(conn)

    def create_comment(self, message_id: int, comment: Comment) -> Comment:
        """
        Insert a comment on an existing message.

        Returns:
            The same Comment with `id`, `created_at` and `message_id` populated.

        Raises:
            psycopg2.errors.ForeignKeyViolation: If the message does not exist.
        """
        sql = """
            INSERT INTO comments (content, message_id, user_id)
            VALUES (%s, %s, %s)
            RETURNING id, created_at;
        """
        conn = self._pool.getconn()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (comment.content, message_id, comment.author_id))
                row = cur.fetchone()
                comment.id = row[0]
                comment.created_at = row[1]
            conn.commit()
            comment.message_id = message_id
            logger.info(f"Added comment #{comment.id} on message #{message_id}")
            return comment
        except Exception as e:
            rollback_quietly(conn)
            logger.error(f"Failed to add comment on message #{message_id}: {e}")
            raise
        finally:
            self._pool.putconn(conn)

    # ── READ ──────────────────────────────────────────────

    def find_comments(self, message_id: int) -> list[Comment]:
        """All comments on a message, oldest first. Empty list if none."""
        sql = f"""
            SELECT {_COMMENT_COLUMNS} FROM comments
            WHERE message_id = %s
            ORDER BY created_at ASC, id ASC;
        """
        conn = self._pool.getconn()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (message_id,))
                return [self._row_to_comment(r) for r in cur.fetchall()]
        finally:
            self._pool.putconn(conn)

    def find_messages_near(self, x: float, y: float) -> list[Message]:
        """
        Fetch messages within `radius_meters` of a point, comments attached.

        Args:
            x: Longitude of the query point.
            y: Latitude of the query point.

        Returns:
            List of Message objects, most recent first.
        """
        sql = f"""
            SELECT {_MESSAGE_COLUMNS} FROM messages m
            WHERE ST_DWithin(m.location, {_POINT_SQL}, %s)
            ORDER BY m.created_at DESC, m.id DESC;
        """
        conn = self._pool.getconn()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (x, y, self.radius_meters))
                messages = [self._row_to_message(r) for r in cur.fetchall()]
                self._attach_comments(cur, messages)
            logger.debug(f"Found {len(messages)} message(s) near ({x}, {y})")
            return messages
        finally:
            self._pool.putconn(conn)

    def find_messages_by_user(self, user_id: str) -> list[Message]:
        """
        Fetch every message a user took part in, comments attached.

        A message qualifies when the user wrote it or commented on it.
        Each message is returned once, most recent first.
        """
        sql = f"""
            SELECT {_MESSAGE_COLUMNS} FROM messages m
            WHERE m.user_id = %s
               OR EXISTS (
                   SELECT 1 FROM comments c
                   WHERE c.message_id = m.id AND c.user_id = %s
               )
            ORDER BY m.created_at DESC, m.id DESC;
        """
        conn = self._pool.getconn()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (user_id, user_id))
                messages = [self._row_to_message(r) for r in cur.fetchall()]
                self._attach_comments(cur, messages)
            logger.debug(f"Found {len(messages)} message(s) for user {user_id}")
            return messages
        finally:
            self._pool.putconn(conn)

    # ── HELPERS ───────────────────────────────────────────

    def _attach_comments(self, cur, messages: list[Message]) -> None:
        """Load comments for all `messages` in a single query and attach them."""
        if not messages:
            return
        sql = f"""
            SELECT {_COMMENT_COLUMNS} FROM comments
            WHERE message_id = ANY(%s)
            ORDER BY created_at ASC, id ASC;
        """
        cur.execute(sql, ([m.id for m in messages],))
        by_message: dict[int, list[Comment]] = {m.id: [] for m in messages}
        for r in cur.fetchall():
            comment = self._row_to_comment(r)
            by_message[comment.message_id].append(comment)
        for m in messages:
            m.comments = by_message[m.id]

    @staticmethod
    def _row_to_message(row: tuple) -> Message:
        """Convert a database row tuple to a Message domain object."""
        return Message(
            id=row[0],
            text=row[1],
            x=float(row[2]),
            y=float(row[3]),
            author_id=row[4],
            created_at=row[5],
        )

    @staticmethod
    def _row_to_comment(row: tuple) -> Comment:
        """Convert a database row tuple to a Comment domain object."""
        return Comment(
            id=row[0],
            message_id=row[1],
            content=row[2],
            author_id=row[3],
            created_at=row[4],
        )
