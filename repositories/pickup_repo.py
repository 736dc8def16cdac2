"""
repositories/pickup_repo.py
---------------------------
Data access for pickup reminders. Both operations call database
routines owned by the web platform.
"""

from db.connection import get_connection, release_connection
from models.pickup import PickupReminder
from utils.logger import get_logger

logger = get_logger(__name__)


class PickupRepository:
    """Repository wrapping the pickup reminder routines."""

    def get_needing_reminders(self) -> list[PickupReminder]:
        """Return the claims whose pickup reminder is due and not yet sent."""
        sql = """
            SELECT claim_id, claimer_id, food_id, pickup_date,
                   pickup_time, pickup_place, reminder_hours_before
            FROM get_pickups_needing_reminders();
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_pickup(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def mark_reminder_sent(self, claim_id: str) -> None:
        """Flag a claim so its reminder is not sent again."""
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute("SELECT mark_reminder_sent(%s);", (claim_id,))
            conn.commit()
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to mark reminder as sent for claim {claim_id}: {e}")
            raise
        finally:
            release_connection(conn)

    @staticmethod
    def _row_to_pickup(row: tuple) -> PickupReminder:
        return PickupReminder(
            claim_id=str(row[0]),
            claimer_id=str(row[1]),
            food_id=str(row[2]),
            pickup_date=row[3],
            pickup_time=row[4],
            pickup_place=row[5],
            reminder_hours_before=row[6] if row[6] is not None else 24,
        )
