"""
services/receipt_service.py
---------------------------
Expires receipts that were never picked up.
"""

from datetime import datetime, timezone

from repositories.receipt_repo import ReceiptRepository
from utils.logger import get_logger

logger = get_logger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def expiry_response(expired: int) -> dict:
    """JSON body for a successful expiry run."""
    return {
        "success": True,
        "expiredCount": expired,
        "message": f"Expired {expired} receipt(s) and returned items to inventory",
        "timestamp": _timestamp(),
    }


def expiry_failure_response(error: Exception) -> dict:
    return {"success": False, "error": str(error), "timestamp": _timestamp()}


class ReceiptService:
    """Thin wrapper around the expire_unclaimed_receipts() routine."""

    def __init__(self, receipt_repo=None):
        self.repo = receipt_repo or ReceiptRepository()

    def expire_unclaimed(self) -> int:
        """Expire stale receipts and return how many were expired."""
        logger.info("Running receipt expiry check...")
        expired = self.repo.expire_unclaimed()
        logger.info(f"Successfully expired {expired} receipts")
        return expired
