"""
Scheduler error taxonomy.

Every failure that aborts a generation batch is a SchedulerError. The API maps
them to a single structured 400 response; nothing is retried here.
"""
from typing import Any


class SchedulerError(Exception):
    """Base class for errors that abort task generation."""

    code = "scheduler_error"

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class MissingRecordError(SchedulerError):
    """Plant, garden or user plant record not found upstream."""

    code = "missing_record"


class SchemaValidationError(SchedulerError):
    """A generated task failed enum/date-format validation. Indicates a logic defect."""

    code = "schema_validation"


class PersistenceError(SchedulerError):
    """The task sink rejected the batch insert."""

    code = "persistence"
