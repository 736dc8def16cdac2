"""
main.py
-------
Entry point for the FoodShare job service.

Responsibilities:
    - Build the FastAPI app exposing one POST trigger per job.
    - Initialize and close the database connection pool.
    - Provide a small CLI to serve the API, run a job once, or create tables.

Usage:
    python main.py serve
    python main.py run schedules --today 2024-03-01
    python main.py init-db
"""

import argparse
import json
import sys
from contextlib import asynccontextmanager
from datetime import date

import uvicorn
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from config import (
    API_HOST,
    API_PORT,
    CORS_ALLOW_HEADERS,
    CORS_ALLOW_METHODS,
    CORS_ALLOW_ORIGINS,
)
from db.connection import close_pool, init_pool
from db.init_db import create_tables
from handlers import pickup_handler, receipt_handler, schedule_handler
from services.pickup_service import PickupReminderService
from services.receipt_service import ReceiptService, expiry_failure_response, expiry_response
from services.schedule_service import ScheduleService
from utils.logger import get_logger

logger = get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": ", ".join(CORS_ALLOW_ORIGINS),
    "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database...")
    init_pool()
    yield
    close_pool()
    logger.info("Job service stopped.")


app = FastAPI(title="FoodShare Jobs", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=CORS_ALLOW_METHODS,
    allow_headers=CORS_ALLOW_HEADERS,
)

app.include_router(schedule_handler.router)
app.include_router(pickup_handler.router)
app.include_router(receipt_handler.router)


@app.options("/{path:path}")
def preflight(path: str) -> Response:
    """Answer bare OPTIONS requests that the CORS middleware lets through."""
    return Response(status_code=200, headers=CORS_HEADERS)


# ── CLI ───────────────────────────────────────────────────

def run_job(job: str, today: date | None = None) -> tuple[bool, dict]:
    """
    Run one job once, outside the HTTP server.

    The schedule job waits for any worker still running past its
    deadline, so the caller can close the pool safely afterwards.

    Returns:
        (ok, body) where body matches the HTTP response of the same job.
    """
    if job == "receipts":
        try:
            return True, expiry_response(ReceiptService().expire_unclaimed())
        except Exception as e:
            logger.error(f"Job '{job}' failed: {e}")
            return False, expiry_failure_response(e)

    schedules = ScheduleService() if job == "schedules" else None
    try:
        if schedules is not None:
            return True, schedules.process(today=today).to_response()
        return True, PickupReminderService().process().to_response()
    except Exception as e:
        logger.error(f"Job '{job}' failed: {e}")
        return False, {"success": False, "error": str(e)}
    finally:
        if schedules is not None:
            schedules.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="foodshare-jobs", description="FoodShare background jobs")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP trigger API")
    serve.add_argument("--host", default=API_HOST)
    serve.add_argument("--port", type=int, default=API_PORT)

    run = sub.add_parser("run", help="Run a single job once and print its summary")
    run.add_argument("job", choices=["schedules", "pickups", "receipts"])
    run.add_argument("--today", type=date.fromisoformat, default=None,
                     help="Run date for the schedule job (YYYY-MM-DD)")

    sub.add_parser("init-db", help="Create the schedule, notification and history tables")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and dispatch."""
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        uvicorn.run(app, host=args.host, port=args.port)
        return 0

    init_pool()
    try:
        if args.command == "init-db":
            create_tables()
            return 0
        ok, body = run_job(args.job, today=args.today)
        print(json.dumps(body, indent=2))
        return 0 if ok else 1
    finally:
        close_pool()


if __name__ == "__main__":
    sys.exit(main())
