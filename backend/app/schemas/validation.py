"""
Explicit validation rules for request payloads.

Pydantic models in this package only check shape and types. The business
rules live here as plain functions returning a ``ValidationResult`` so the
services can enforce them no matter who calls them.

Usage:
    result = validate_complaint(payload)
    ensure_valid(result)  # raises app.core.exceptions.ValidationError
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from email_validator import validate_email, EmailNotValidError

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.models.complaint import ComplaintCategory, ComplaintMealType
from app.models.review import MealSlot

MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 2
MAX_HALL_CODE_LENGTH = 10
MIN_RATING = 1
MAX_RATING = 5
MAX_COMMENT_LENGTH = 1000
MIN_COMPLAINT_LENGTH = 10
MAX_COMPLAINT_LENGTH = 2000


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation function: ok, or the first problem found"""
    ok: bool
    message: Optional[str] = None
    field: Optional[str] = None

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, message: str, field: Optional[str] = None) -> "ValidationResult":
        return cls(ok=False, message=message, field=field)


OK = ValidationResult.success()


def ensure_valid(result: ValidationResult) -> None:
    """Raise ValidationError for a failed result"""
    if not result.ok:
        raise ValidationError(result.message or "Invalid input", field=result.field)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def normalize_hall_code(hall_code: Optional[str]) -> str:
    return (hall_code or "").strip().upper()


def domain_error_message() -> str:
    return f"Only {settings.INSTITUTE_NAME} students are allowed ({settings.email_suffix})"


def _check_hall_code(hall_code: Optional[str], field: str, required: bool) -> ValidationResult:
    if hall_code is None or not hall_code.strip():
        if required:
            return ValidationResult.failure("Hall code is required", field)
        return OK
    if len(hall_code.strip()) > MAX_HALL_CODE_LENGTH:
        return ValidationResult.failure(
            f"Hall code must be at most {MAX_HALL_CODE_LENGTH} characters", field
        )
    return OK


# ==================== Credentials ====================

def validate_signup(name: str, email: str, password: str, hall: Optional[str] = None) -> ValidationResult:
    """Institutional email, password >= 6 chars, name >= 2 chars, sane hall code"""
    email = normalize_email(email)
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return ValidationResult.failure("Invalid email address", "email")

    if not email.endswith(settings.email_suffix):
        return ValidationResult.failure(domain_error_message(), "email")

    if len(password or "") < MIN_PASSWORD_LENGTH:
        return ValidationResult.failure(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters", "password"
        )

    if len((name or "").strip()) < MIN_NAME_LENGTH:
        return ValidationResult.failure(
            f"Name must be at least {MIN_NAME_LENGTH} characters", "name"
        )

    return _check_hall_code(hall, "hall", required=False)


def validate_login(email: str, password: str) -> ValidationResult:
    if not normalize_email(email):
        return ValidationResult.failure("Email is required", "email")
    if not password:
        return ValidationResult.failure("Password is required", "password")
    return OK


# ==================== Reviews ====================

def validate_rating(value: Any, field: str) -> ValidationResult:
    """A rating is absent (None) or an integer in [1, 5]"""
    if value is None:
        return OK
    if isinstance(value, bool) or not isinstance(value, int):
        return ValidationResult.failure(f"{field} must be a whole number", field)
    if not MIN_RATING <= value <= MAX_RATING:
        return ValidationResult.failure(
            f"{field} must be between {MIN_RATING} and {MAX_RATING}", field
        )
    return OK


def validate_review_payload(payload: Dict[str, Any], partial: bool = False) -> ValidationResult:
    """
    Validate a review body given as snake_case field names.

    ``partial`` is for updates: only the meal fields present are checked and
    ``review_date``/``hall_code`` are not required.
    """
    if not partial:
        if payload.get("review_date") is None:
            return ValidationResult.failure("Review date is required", "review_date")
        hall_check = _check_hall_code(payload.get("hall_code"), "hall_code", required=True)
        if not hall_check.ok:
            return hall_check

    for slot in MealSlot:
        rating_check = validate_rating(payload.get(slot.rating_field), slot.rating_field)
        if not rating_check.ok:
            return rating_check

        comment = payload.get(slot.comment_field)
        if comment is not None and len(comment) > MAX_COMMENT_LENGTH:
            return ValidationResult.failure(
                f"{slot.comment_field} must be at most {MAX_COMMENT_LENGTH} characters",
                slot.comment_field,
            )

    return OK


# ==================== Complaints ====================

def validate_complaint(payload: Dict[str, Any]) -> ValidationResult:
    meal_types = [m.value for m in ComplaintMealType]
    if payload.get("meal_type") not in meal_types:
        return ValidationResult.failure(
            f"Meal type must be one of: {', '.join(meal_types)}", "meal_type"
        )

    categories = [c.value for c in ComplaintCategory]
    if payload.get("category") not in categories:
        return ValidationResult.failure(
            f"Category must be one of: {', '.join(categories)}", "category"
        )

    # Length counts the text as submitted; surrounding whitespace is trimmed on save
    text = payload.get("text") or ""
    if len(text) < MIN_COMPLAINT_LENGTH or not text.strip():
        return ValidationResult.failure(
            f"Complaint must be at least {MIN_COMPLAINT_LENGTH} characters", "text"
        )
    if len(text) > MAX_COMPLAINT_LENGTH:
        return ValidationResult.failure(
            f"Complaint must be at most {MAX_COMPLAINT_LENGTH} characters", "text"
        )

    hall_check = _check_hall_code(payload.get("hall_code"), "hall_code", required=True)
    if not hall_check.ok:
        return hall_check

    if payload.get("complaint_date") is None:
        return ValidationResult.failure("Complaint date is required", "complaint_date")

    return OK
