"""
utils/exceptions.py
-------------------
Exception hierarchy shared by the job services and HTTP handlers.

Fatal errors (the job could not even enumerate its work) surface as a
500 response. Per-item errors are caught inside the service and only
show up in the run summary.
"""


class JobError(Exception):
    """Base class for all job errors."""


class ScheduleFetchError(JobError):
    """The list of active donation schedules could not be read."""


class PickupFetchError(JobError):
    """The list of pickups needing reminders could not be read."""


class InvalidScheduleError(JobError):
    """A single schedule carries data the advancer cannot process."""
