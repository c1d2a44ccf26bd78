"""Exceptions raised by the schedule pipeline."""


class ScheduleError(Exception):
    """Base class for schedule pipeline failures."""


class InputShapeError(ScheduleError):
    """Raised when the input cannot be processed at all (bad year, no document root)."""


class RetrievalError(ScheduleError):
    """Raised when the schedule document could not be downloaded."""
