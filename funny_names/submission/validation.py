"""
Form validation producing one error slot per field.
"""

from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from .models import DEFAULT_MAX_LENGTH, NameForm, StudentForm, ValidationResult


def validate_fields(
    name: Optional[str],
    username: Optional[str] = None,
    require_username: bool = True,
    max_name_length: int = DEFAULT_MAX_LENGTH,
    max_username_length: int = DEFAULT_MAX_LENGTH,
) -> ValidationResult:
    """
    Validate every field of the form at once.

    A failing field never hides the outcome of another one; each failing field
    reports the message of the first rule it broke.

    Args:
        name: Raw display name
        username: Raw username (ignored unless ``require_username``)
        require_username: Whether the two-field form is in use
        max_name_length: Upper bound for the trimmed name
        max_username_length: Upper bound for the trimmed username

    Returns:
        ValidationResult with per-field errors and, if valid, the trimmed payload
    """
    form_class = StudentForm if require_username else NameForm
    raw = {"name": name}
    if require_username:
        raw["username"] = username

    errors = {field_name: None for field_name in form_class.model_fields}
    context = {
        "max_name_length": max_name_length,
        "max_username_length": max_username_length,
    }

    try:
        form = form_class.model_validate(raw, context=context)
    except PydanticValidationError as e:
        for issue in e.errors():
            field_name = issue["loc"][0] if issue["loc"] else None
            if field_name in errors and errors[field_name] is None:
                errors[field_name] = issue["msg"]
        return ValidationResult(errors=errors)

    return ValidationResult(errors=errors, data=form.model_dump())
