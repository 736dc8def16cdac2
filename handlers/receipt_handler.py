"""
handlers/receipt_handler.py
---------------------------
HTTP trigger for receipt expiry.
Typically scheduled weekly (e.g. Fridays at 17:00 via pg_cron).
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from services.receipt_service import ReceiptService, expiry_failure_response, expiry_response
from utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["receipts"])


def get_receipt_service() -> ReceiptService:
    return ReceiptService()


@router.post("/expire-receipts")
def expire_receipts(service: ReceiptService = Depends(get_receipt_service)):
    """Expire unclaimed receipts and return items to inventory."""
    try:
        expired = service.expire_unclaimed()
    except Exception as e:
        logger.error(f"Exception in expire-receipts: {e}")
        return JSONResponse(status_code=500, content=expiry_failure_response(e))
    return expiry_response(expired)


@router.post("/expire-receipts/{subpath:path}")
def expire_receipts_subpath(subpath: str, service: ReceiptService = Depends(get_receipt_service)):
    return expire_receipts(service=service)
