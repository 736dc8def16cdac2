"""
db/init_db.py
-------------
Creates the tables the jobs read and write if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db

The pickup and receipt routines (get_pickups_needing_reminders,
mark_reminder_sent, expire_unclaimed_receipts) belong to the web
platform's migrations and are not created here.
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Recurring donation commitments, edited by donors in the web app
CREATE TABLE IF NOT EXISTS donation_schedules (
    id                      UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id                 UUID NOT NULL,
    title                   VARCHAR(200) NOT NULL DEFAULT '',
    amount                  NUMERIC(12,2) NOT NULL CHECK (amount > 0),
    frequency               VARCHAR(20) NOT NULL CHECK (frequency IN ('daily', 'weekly', 'monthly', 'yearly')),
    next_donation_date      DATE NOT NULL,
    reminder_enabled        BOOLEAN DEFAULT TRUE,
    reminder_days_before    INT DEFAULT 1 CHECK (reminder_days_before >= 0),
    status                  VARCHAR(20) DEFAULT 'active',
    total_donated           NUMERIC(12,2) DEFAULT 0,
    donation_count          INT DEFAULT 0,
    last_processed_at       TIMESTAMPTZ,
    created_at              TIMESTAMPTZ DEFAULT NOW()
);

-- In-app notifications shown to users
CREATE TABLE IF NOT EXISTS notifications (
    id              SERIAL PRIMARY KEY,
    user_id         UUID NOT NULL,
    type            VARCHAR(50) NOT NULL,
    title           VARCHAR(200) NOT NULL,
    message         TEXT NOT NULL,
    read            BOOLEAN DEFAULT FALSE,
    data            JSONB,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Append-only ledger of processed schedule occurrences
CREATE TABLE IF NOT EXISTS donation_history (
    id              SERIAL PRIMARY KEY,
    schedule_id     UUID NOT NULL REFERENCES donation_schedules(id) ON DELETE CASCADE,
    user_id         UUID NOT NULL,
    amount          NUMERIC(12,2) NOT NULL,
    status          VARCHAR(20) NOT NULL DEFAULT 'pending',
    due_date        DATE NOT NULL,
    processed_at    TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- One history row per schedule occurrence
CREATE UNIQUE INDEX IF NOT EXISTS uq_donation_history_occurrence
    ON donation_history(schedule_id, due_date);
CREATE INDEX IF NOT EXISTS idx_schedules_active_due
    ON donation_schedules(next_donation_date) WHERE status = 'active';
CREATE INDEX IF NOT EXISTS idx_notifications_user ON notifications(user_id, read);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
