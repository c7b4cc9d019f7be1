import logging
from threading import Lock
from typing import Any, Dict, List, Optional

from ..errors import NetworkError, QuotaExhaustedError, StoreError, ValidationError
from ..quota import QuotaManager
from ..roster import Student, StudentsClient
from .models import DEFAULT_MAX_LENGTH, SubmissionResult
from .validation import validate_fields

logger = logging.getLogger(__name__)


class SubmissionWorkflow:
    """Quota-gated validated-create workflow for one client scope.

    A submit runs gate -> validate -> create -> refresh -> clear -> decrement,
    in that order, and only one submit may be in flight at a time.
    """

    def __init__(self,
                 client: StudentsClient,
                 quota_manager: QuotaManager,
                 require_username: bool = True,
                 max_name_length: int = DEFAULT_MAX_LENGTH,
                 max_username_length: int = DEFAULT_MAX_LENGTH):
        self.client = client
        self.quota_manager = quota_manager
        self.require_username = require_username
        self.max_name_length = max_name_length
        self.max_username_length = max_username_length

        self.entries: List[Student] = []
        self.name = ""
        self.username = ""
        self.errors: Dict[str, Optional[str]] = self._empty_errors()
        self._submit_lock = Lock()

    def _empty_errors(self) -> Dict[str, Optional[str]]:
        if self.require_username:
            return {"name": None, "username": None}
        return {"name": None}

    @property
    def remaining(self) -> int:
        return self.quota_manager.remaining

    @property
    def in_flight(self) -> bool:
        return self._submit_lock.locked()

    @property
    def can_submit(self) -> bool:
        """Whether the submit control should be enabled."""
        if self.remaining <= 0 or self.in_flight:
            return False
        required = self.username if self.require_username else self.name
        return bool(required.strip())

    def start(self) -> None:
        """Load the persisted quota and fetch the list once."""
        self.quota_manager.load()
        self.refresh()

    def set_fields(self, name: Optional[str] = None, username: Optional[str] = None) -> None:
        """Apply field-change events. None leaves a field as it is."""
        if name is not None:
            self.name = name
        if username is not None:
            self.username = username

    def refresh(self) -> bool:
        """Replace the local list with the remote one.

        On failure the previous list is kept and the error is logged.
        """
        try:
            entries = self.client.list_students()
        except NetworkError as e:
            logger.error(f"Error fetching students: {e}")
            return False

        self.entries = entries
        return True

    def submit(self) -> SubmissionResult:
        """Submit the pending fields.

        Returns:
            SubmissionResult; ``reason`` is None on success
        """
        if not self._submit_lock.acquire(blocking=False):
            logger.info("Submission ignored, another one is in flight")
            return SubmissionResult(
                success=False,
                reason="busy",
                errors=dict(self.errors),
                remaining=self.remaining,
                message="A submission is already in progress."
            )
        try:
            return self._submit()
        finally:
            self._submit_lock.release()

    def _submit(self) -> SubmissionResult:
        try:
            self._check_quota()
            payload = self._validate()
        except QuotaExhaustedError as e:
            self.errors["name"] = e.message
            return self._failure("quota_exhausted", e.message)
        except ValidationError as e:
            self.errors.update(e.errors)
            return self._failure("invalid", "Please correct the highlighted fields.")

        self.errors = self._empty_errors()

        try:
            self.client.create_student(payload)
        except NetworkError as e:
            logger.error(f"Error adding student: {e}")
            return self._failure("network_error", "The entry could not be added.")

        self.refresh()
        self.name = ""
        self.username = ""
        try:
            result = self.quota_manager.consume()
        except StoreError as e:
            # The entry exists remotely; the in-memory counter is already down
            logger.error(f"Entry added but remaining chances not saved: {e}")
            return SubmissionResult(
                success=True,
                errors=dict(self.errors),
                remaining=self.remaining,
                message="The entry was added, but remaining chances could not be saved."
            )

        logger.info(f"Added entry {payload.get('name')!r}, remaining chances: {result.remaining}")
        return SubmissionResult(
            success=True,
            errors=dict(self.errors),
            remaining=result.remaining
        )

    def _check_quota(self) -> None:
        check = self.quota_manager.check()
        if not check.allowed:
            raise QuotaExhaustedError(check.message, remaining=check.remaining)

    def _validate(self) -> Dict[str, str]:
        result = validate_fields(
            self.name,
            self.username,
            require_username=self.require_username,
            max_name_length=self.max_name_length,
            max_username_length=self.max_username_length,
        )
        if not result.is_valid:
            raise ValidationError(result.errors)
        return result.data

    def _failure(self, reason: str, message: str) -> SubmissionResult:
        return SubmissionResult(
            success=False,
            reason=reason,
            errors=dict(self.errors),
            remaining=self.remaining,
            message=message
        )

    def snapshot(self) -> Dict[str, Any]:
        """Serializable view of the state for rendering."""
        return {
            "entries": [entry.model_dump() for entry in self.entries],
            "fields": {"name": self.name, "username": self.username},
            "errors": dict(self.errors),
            "remaining": self.remaining,
            "can_submit": self.can_submit,
            "in_flight": self.in_flight,
            "require_username": self.require_username
        }
