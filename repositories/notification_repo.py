"""
repositories/notification_repo.py
---------------------------------
Data access layer for the `notifications` table.
"""

from psycopg2.extras import Json

from db.connection import get_connection, release_connection
from models.notification import Notification
from utils.logger import get_logger

logger = get_logger(__name__)


class NotificationRepository:
    """Repository for inserting notifications."""

    def add(self, notification: Notification) -> Notification:
        """
        Insert a new notification.

        Args:
            notification: The Notification to persist.

        Returns:
            The same object with its `id` and `created_at` populated.
        """
        sql = """
            INSERT INTO notifications (user_id, type, title, message, read, data)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING id, created_at;
        """
        data = Json(notification.data) if notification.data is not None else None
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    notification.user_id, notification.type, notification.title,
                    notification.message, notification.read, data,
                ))
                row = cur.fetchone()
                notification.id = row[0]
                notification.created_at = row[1]
            conn.commit()
            return notification
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add {notification.type} notification for {notification.user_id}: {e}")
            raise
        finally:
            release_connection(conn)
