"""
handlers/pickup_handler.py
--------------------------
HTTP trigger for the pickup reminder job.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from services.pickup_service import PickupReminderService
from utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["pickup-reminders"])


def get_pickup_service() -> PickupReminderService:
    return PickupReminderService()


@router.post("/process-pickup-reminders")
def process_pickup_reminders(service: PickupReminderService = Depends(get_pickup_service)):
    """Notify claimers of upcoming pickups."""
    try:
        result = service.process()
    except Exception as e:
        logger.error(f"Error processing pickup reminders: {e}")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})
    return result.to_response()


@router.post("/process-pickup-reminders/{subpath:path}")
def process_pickup_reminders_subpath(
    subpath: str,
    service: PickupReminderService = Depends(get_pickup_service),
):
    return process_pickup_reminders(service=service)
