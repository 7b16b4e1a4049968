"""
Validation Module
=================

Human presence validation for uploaded images.
"""

from datelens_core.validation.gate import (
    HumanValidationGate,
    HumanValidationResult,
    ValidationReport,
    ValidationState,
)

__all__ = [
    "HumanValidationGate",
    "HumanValidationResult",
    "ValidationReport",
    "ValidationState",
]
