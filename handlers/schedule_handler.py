"""
handlers/schedule_handler.py
----------------------------
HTTP trigger for the donation schedule job.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from services.schedule_service import ScheduleService
from utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["donation-schedules"])


def get_schedule_service() -> ScheduleService:
    return ScheduleService()


@router.post("/process-donation-schedules")
def process_donation_schedules(
    today: Optional[date] = None,
    service: ScheduleService = Depends(get_schedule_service),
):
    """
    Send due reminders and roll due schedules forward.

    Responds 200 even when individual schedules failed (see
    `results.errors`); only a failure to list schedules returns 500.
    """
    try:
        result = service.process(today=today)
    except Exception as e:
        logger.error(f"Error processing donation schedules: {e}")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})
    return result.to_response()


@router.post("/process-donation-schedules/{subpath:path}")
def process_donation_schedules_subpath(
    subpath: str,
    today: Optional[date] = None,
    service: ScheduleService = Depends(get_schedule_service),
):
    return process_donation_schedules(today=today, service=service)
