"""
models/notification.py
----------------------
Domain model for in-app notifications written by the jobs.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

DONATION_REMINDER = "donation_reminder"
PICKUP_REMINDER = "pickup_reminder"


@dataclass
class Notification:
    """
    An unread notification addressed to a single user.

    Attributes:
        user_id: Recipient.
        type: Notification kind ('donation_reminder', 'pickup_reminder').
        title: Short heading.
        message: Body text.
        read: Always False when created by a job.
        data: Optional JSON payload for the client.
    """
    user_id: str
    type: str
    title: str
    message: str
    read: bool = False
    data: Optional[dict] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
