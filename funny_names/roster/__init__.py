"""
Remote list ("roster") access: models and HTTP client for /students.
"""

from .models import Student
from .client import StudentsClient, build_session

__all__ = ["Student", "StudentsClient", "build_session"]
