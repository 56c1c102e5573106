from __future__ import annotations

from typing import Optional


class AddyError(Exception):
    """Base error for failures surfaced to the HTTP boundary."""


class UpstreamError(AddyError):
    """A data source answered with a non-success status or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ModelError(AddyError):
    """The completion model replied with something we cannot decode."""


class ValidationError(AddyError):
    """A request is missing a required parameter or carries an invalid one."""
