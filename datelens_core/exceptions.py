"""
Exceptions
==========

Error types raised inside the DateLens core. None of these escape the two
public search operations; the orchestrator converts them into envelopes.
"""


class DateLensError(Exception):
    """Base class for all DateLens errors."""


class ImageDecodeError(DateLensError):
    """The supplied image encoding could not be decoded into pixels."""


class ModelUnavailableError(DateLensError):
    """A detection or segmentation model could not be loaded or run."""

    def __init__(self, model_name: str, reason: str = ""):
        self.model_name = model_name
        self.reason = reason
        message = f"Model '{model_name}' unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
