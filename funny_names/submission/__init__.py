"""
Quota-gated submission workflow: validation, create, refresh, and the web
routes that drive it.
"""

from .models import NameForm, StudentForm, ValidationResult, SubmissionResult
from .validation import validate_fields
from .services import SubmissionWorkflow
from .registry import WorkflowRegistry

__all__ = [
    "NameForm",
    "StudentForm",
    "ValidationResult",
    "SubmissionResult",
    "validate_fields",
    "SubmissionWorkflow",
    "WorkflowRegistry",
]
