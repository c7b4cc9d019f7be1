"""
Basic import tests to verify the core functionality.
"""

import logging


def test_package_imports():
    """Test that the main components can be imported."""
    from funny_names.main import create_app
    from funny_names.quota import QuotaManager, JsonFileStore
    from funny_names.roster import StudentsClient, build_session
    from funny_names.submission import SubmissionWorkflow, WorkflowRegistry, validate_fields

    assert callable(create_app)
    assert callable(build_session)
    assert callable(validate_fields)


def test_error_taxonomy():
    """Test that all error types share one base class."""
    from funny_names.errors import FunnyNamesError, ValidationError, QuotaExhaustedError, NetworkError

    error = ValidationError({"name": None, "username": "Username is required"})
    assert isinstance(error, FunnyNamesError)
    assert error.errors["username"] == "Username is required"
    assert "username" in str(error)

    assert issubclass(QuotaExhaustedError, FunnyNamesError)
    assert NetworkError("down", status_code=503).status_code == 503


def test_logging_setup_and_stop():
    """Test that queue-based logging can be started and stopped."""
    from funny_names.logging_config import setup_logging, stop_logging, get_logger

    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    try:
        setup_logging(debug=False)
        assert logging.getLogger("urllib3").level == logging.WARNING
        assert get_logger("funny_names").name == "funny_names"
    finally:
        stop_logging()
        root_logger.handlers[:] = saved_handlers
        root_logger.setLevel(saved_level)
