"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_pool, rollback_quietly
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Geography types and distance functions
CREATE EXTENSION IF NOT EXISTS postgis;

-- Messages table: one geotagged post per row
CREATE TABLE IF NOT EXISTS messages (
    id              SERIAL PRIMARY KEY,
    message         TEXT NOT NULL,
    location        GEOGRAPHY(POINT, 4326) NOT NULL,
    user_id         TEXT NOT NULL,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- Comments table: many comments per message
CREATE TABLE IF NOT EXISTS comments (
    id              SERIAL PRIMARY KEY,
    content         TEXT NOT NULL,
    message_id      INT NOT NULL REFERENCES messages(id),
    user_id         TEXT NOT NULL,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_messages_location ON messages USING GIST (location);
CREATE INDEX IF NOT EXISTS idx_messages_user ON messages(user_id);
CREATE INDEX IF NOT EXISTS idx_comments_message ON comments(message_id, created_at);
CREATE INDEX IF NOT EXISTS idx_comments_user ON comments(user_id);
"""


def create_tables(db_pool=None) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).

    Args:
        db_pool: Pool to borrow a connection from; defaults to the
            pool set up by ``db.connection.init_pool``.
    """
    db_pool = db_pool or get_pool()
    conn = db_pool.getconn()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        rollback_quietly(conn)
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        db_pool.putconn(conn)


if __name__ == "__main__":
    from db.connection import close_pool, init_pool
    create_tables(init_pool())
    close_pool()
    print("Database schema created successfully.")
