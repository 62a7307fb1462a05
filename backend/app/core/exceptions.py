"""
Custom Exceptions for the Mess Feedback service
===============================================

Services raise these instead of HTTPException so that the same rules hold
whether a store is called from a route, a script, or a test. The API layer
turns them into JSON responses using ``status_code`` and ``to_dict()``.

Usage:
    from app.core.exceptions import ReviewNotFoundError, ForbiddenError

    review = await review_service.get_review(db, review_id)
    if not review:
        raise ReviewNotFoundError(review_id)
"""

from typing import Optional, Any, Dict


class MessFeedbackError(Exception):
    """Base exception for all Mess Feedback errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(MessFeedbackError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ReviewEditWindowClosedError(ValidationError):
    """Reviews can only be edited on the day they are for"""

    def __init__(self, review_date: str):
        super().__init__("You can only edit today's review", field="reviewDate")
        self.code = "EDIT_WINDOW_CLOSED"
        self.details["review_date"] = review_date


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthError(MessFeedbackError):
    """User authentication failed"""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, code="AUTH_FAILED")


class InvalidTokenError(AuthError):
    """JWT token is invalid"""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)
        self.code = "INVALID_TOKEN"


class TokenExpiredError(AuthError):
    """JWT token has expired"""

    def __init__(self):
        super().__init__("Token has expired")
        self.code = "TOKEN_EXPIRED"


class InvalidCredentialsError(AuthError):
    """Unknown email or wrong password - one message for both"""

    # Login failures are reported as 400 to the client
    status_code = 400

    def __init__(self):
        super().__init__("Invalid email or password")
        self.code = "INVALID_CREDENTIALS"


class ForbiddenError(MessFeedbackError):
    """User not authorized for this resource"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="FORBIDDEN")


# ============================================
# Resource Errors (404-type)
# ============================================

class NotFoundError(MessFeedbackError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, message: str, code: str = "NOT_FOUND", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details)


class ReviewNotFoundError(NotFoundError):
    """Review not found"""

    def __init__(self, review_id: Optional[str] = None, message: str = "Review not found"):
        super().__init__(
            message,
            code="REVIEW_NOT_FOUND",
            details={"review_id": review_id} if review_id else {}
        )


class HallNotFoundError(NotFoundError):
    """Hall not found"""

    def __init__(self, hall_code: str):
        super().__init__(
            f"Hall '{hall_code}' not found",
            code="HALL_NOT_FOUND",
            details={"hall_code": hall_code}
        )


# ============================================
# Conflict Errors
# ============================================

class ConflictError(MessFeedbackError):
    """Uniqueness violation"""

    # Duplicates are reported as 400 to the client
    status_code = 400

    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message, code=code)


class EmailAlreadyRegisteredError(ConflictError):
    """Signup with an email that already has an account"""

    def __init__(self):
        super().__init__("Email already registered", code="EMAIL_ALREADY_REGISTERED")


class DuplicateReviewError(ConflictError):
    """Second review for the same user and day"""

    def __init__(self, review_date: str):
        super().__init__(
            "You've already submitted a review for this date",
            code="DUPLICATE_REVIEW"
        )
        self.details["review_date"] = review_date


# ============================================
# Rate Limiting & Internal Errors
# ============================================

class RateLimitError(MessFeedbackError):
    """Too many requests from one client address"""

    status_code = 429

    def __init__(self, message: str = "Too many requests. Please try again later.",
                 retry_after: Optional[int] = None):
        super().__init__(message, code="RATE_LIMITED")
        self.retry_after = retry_after
        if retry_after:
            self.details["retry_after_seconds"] = retry_after


class PayloadTooLargeError(MessFeedbackError):
    """Request body over the configured size cap"""

    status_code = 413

    def __init__(self, max_bytes: int):
        super().__init__(
            f"Request body too large. Maximum size is {max_bytes} bytes",
            code="PAYLOAD_TOO_LARGE",
            details={"max_bytes": max_bytes},
        )


class InternalError(MessFeedbackError):
    """Unexpected failure - message is safe to show to clients"""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, code="INTERNAL_ERROR")


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: MessFeedbackError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "message": error.message,
        "error": error.to_dict()
    }
