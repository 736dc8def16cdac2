"""
repositories/receipt_repo.py
----------------------------
Data access for receipt expiry.
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)


class ReceiptRepository:
    """Repository wrapping the expire_unclaimed_receipts() routine."""

    def expire_unclaimed(self) -> int:
        """
        Expire unclaimed receipts and return their items to inventory.

        Returns:
            Number of receipts expired.
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute("SELECT expire_unclaimed_receipts();")
                row = cur.fetchone()
            conn.commit()
            return int(row[0] or 0) if row else 0
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to expire receipts: {e}")
            raise
        finally:
            release_connection(conn)
