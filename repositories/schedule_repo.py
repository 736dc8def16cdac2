"""
repositories/schedule_repo.py
-----------------------------
Data access layer for donation schedules and their history ledger.
All SQL touching `donation_schedules` and `donation_history` lives here.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from db.connection import get_connection, release_connection
from models.donation_schedule import DonationHistoryEntry, DonationSchedule
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = (
    "id, user_id, title, amount, frequency, next_donation_date, "
    "reminder_enabled, reminder_days_before, status, "
    "total_donated, donation_count, last_processed_at"
)


class ScheduleRepository:
    """Repository for the donation_schedules and donation_history tables."""

    # ── READ ──────────────────────────────────────────────

    def get_active(self) -> list[DonationSchedule]:
        """
        Get every schedule whose status is 'active'.

        Returns:
            List of DonationSchedule objects, soonest due first.
        """
        sql = f"""
            SELECT {_COLUMNS} FROM donation_schedules
            WHERE status = 'active'
            ORDER BY next_donation_date ASC;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_schedule(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    # ── UPDATE ────────────────────────────────────────────

    def advance(
        self,
        schedule: DonationSchedule,
        next_date: date,
        processed_at: datetime,
    ) -> Optional[DonationHistoryEntry]:
        """
        Roll a schedule forward and append its history entry in one transaction.

        The update only matches while the row still holds the
        `next_donation_date` we read, so two overlapping runs cannot both
        advance the same occurrence.

        Args:
            schedule: The schedule as read at the start of the run.
            next_date: The new next_donation_date.
            processed_at: Timestamp stored on both rows.

        Returns:
            The appended DonationHistoryEntry, or None if the schedule had
            already been advanced by someone else.
        """
        update_sql = """
            UPDATE donation_schedules
            SET next_donation_date = %s,
                last_processed_at = %s,
                total_donated = COALESCE(total_donated, 0) + %s,
                donation_count = COALESCE(donation_count, 0) + 1
            WHERE id = %s AND next_donation_date = %s AND status = 'active';
        """
        insert_sql = """
            INSERT INTO donation_history
                (schedule_id, user_id, amount, status, due_date, processed_at)
            VALUES (%s, %s, %s, 'pending', %s, %s)
            ON CONFLICT (schedule_id, due_date) DO NOTHING
            RETURNING id;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(update_sql, (
                    next_date, processed_at, schedule.amount,
                    schedule.id, schedule.next_donation_date,
                ))
                if cur.rowcount == 0:
                    conn.rollback()
                    logger.info(
                        f"Schedule {schedule.id} already advanced past "
                        f"{schedule.next_donation_date}, skipping"
                    )
                    return None

                cur.execute(insert_sql, (
                    schedule.id, schedule.user_id, schedule.amount,
                    schedule.next_donation_date, processed_at,
                ))
                row = cur.fetchone()
            conn.commit()
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to advance schedule {schedule.id}: {e}")
            raise
        finally:
            release_connection(conn)

        return DonationHistoryEntry(
            id=row[0] if row else None,
            schedule_id=schedule.id,
            user_id=schedule.user_id,
            amount=schedule.amount,
            due_date=schedule.next_donation_date,
            processed_at=processed_at,
        )

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_schedule(row: tuple) -> DonationSchedule:
        """Convert a database row tuple to a DonationSchedule domain object."""
        return DonationSchedule(
            id=str(row[0]),
            user_id=str(row[1]),
            title=row[2] or "",
            amount=Decimal(row[3]),
            frequency=row[4],
            next_donation_date=row[5],
            reminder_enabled=bool(row[6]),
            reminder_days_before=row[7] if row[7] is not None else 0,
            status=row[8],
            total_donated=Decimal(row[9] or 0),
            donation_count=row[10] or 0,
            last_processed_at=row[11],
        )
