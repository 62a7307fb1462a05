"""
Unit Tests for the explicit validation functions
"""
import pytest
from datetime import date

from app.core.exceptions import ValidationError
from app.schemas.validation import (
    ensure_valid,
    normalize_email,
    validate_complaint,
    validate_login,
    validate_rating,
    validate_review_payload,
    validate_signup,
)


class TestSignupValidation:

    def test_institute_email_with_six_char_password_is_valid(self):
        result = validate_signup("Asha Rao", "asha@iitkgp.ac.in", "abcdef", "RK")

        assert result.ok is True
        assert result.message is None

    def test_gmail_rejected_with_domain_message(self):
        result = validate_signup("Asha Rao", "asha@gmail.com", "abcdef")

        assert result.ok is False
        assert result.field == "email"
        assert result.message == "Only IIT Kharagpur students are allowed (@iitkgp.ac.in)"

    def test_lookalike_domain_rejected(self):
        result = validate_signup("Asha Rao", "asha@notiitkgp.ac.in", "abcdef")

        assert result.ok is False

    def test_email_checked_case_insensitively(self):
        assert validate_signup("Asha Rao", "  Asha@IITKGP.AC.IN ", "abcdef").ok is True

    def test_malformed_email_rejected(self):
        result = validate_signup("Asha Rao", "not-an-email", "abcdef")

        assert result.ok is False
        assert result.field == "email"

    def test_five_char_password_rejected(self):
        result = validate_signup("Asha Rao", "asha@iitkgp.ac.in", "abcde")

        assert result.ok is False
        assert result.message == "Password must be at least 6 characters"

    def test_one_char_name_rejected(self):
        result = validate_signup("A", "asha@iitkgp.ac.in", "abcdef")

        assert result.ok is False
        assert result.message == "Name must be at least 2 characters"

    def test_whitespace_name_rejected(self):
        assert validate_signup("   ", "asha@iitkgp.ac.in", "abcdef").ok is False

    def test_hall_is_optional(self):
        assert validate_signup("Asha Rao", "asha@iitkgp.ac.in", "abcdef", None).ok is True

    def test_overlong_hall_rejected(self):
        result = validate_signup("Asha Rao", "asha@iitkgp.ac.in", "abcdef", "X" * 11)

        assert result.ok is False
        assert result.field == "hall"


class TestLoginValidation:

    def test_requires_email_and_password(self):
        assert validate_login("", "secret").ok is False
        assert validate_login("a@iitkgp.ac.in", "").ok is False
        assert validate_login("a@iitkgp.ac.in", "secret").ok is True


class TestRatingValidation:

    @pytest.mark.parametrize("value", [None, 1, 3, 5])
    def test_valid_ratings(self, value):
        assert validate_rating(value, "lunch_rating").ok is True

    @pytest.mark.parametrize("value", [0, 6, -1, 2.5, "4", True])
    def test_invalid_ratings(self, value):
        result = validate_rating(value, "lunch_rating")

        assert result.ok is False
        assert result.field == "lunch_rating"


class TestReviewPayloadValidation:

    def test_full_payload_valid(self):
        payload = {
            "review_date": date(2024, 3, 1),
            "hall_code": "RK",
            "breakfast_rating": 4,
            "dinner_rating": None,
            "lunch_comment": "Dal was cold",
        }

        assert validate_review_payload(payload).ok is True

    def test_date_required_on_create(self):
        result = validate_review_payload({"hall_code": "RK"})

        assert result.ok is False
        assert result.field == "review_date"

    def test_hall_required_on_create(self):
        result = validate_review_payload({"review_date": date(2024, 3, 1)})

        assert result.ok is False
        assert result.field == "hall_code"

    def test_partial_needs_no_date_or_hall(self):
        assert validate_review_payload({"snacks_rating": 2}, partial=True).ok is True

    def test_partial_still_checks_ratings(self):
        result = validate_review_payload({"snacks_rating": 9}, partial=True)

        assert result.ok is False
        assert result.field == "snacks_rating"

    def test_overlong_comment_rejected(self):
        result = validate_review_payload({"dinner_comment": "x" * 1001}, partial=True)

        assert result.ok is False


class TestComplaintValidation:

    def _payload(self, **overrides):
        payload = {
            "meal_type": "Lunch",
            "category": "Hygiene",
            "text": "Found a hair in the rice",
            "hall_code": "RK",
            "complaint_date": date(2024, 3, 1),
        }
        payload.update(overrides)
        return payload

    def test_valid_complaint(self):
        assert validate_complaint(self._payload()).ok is True

    def test_nine_characters_rejected(self):
        result = validate_complaint(self._payload(text="123456789"))

        assert result.ok is False
        assert result.message == "Complaint must be at least 10 characters"

    def test_ten_characters_accepted(self):
        assert validate_complaint(self._payload(text="1234567890")).ok is True

    def test_length_counts_surrounding_whitespace(self):
        assert validate_complaint(self._payload(text=" abcdefghi ")).ok is True

    def test_blank_text_rejected_even_when_long(self):
        assert validate_complaint(self._payload(text=" " * 12)).ok is False

    def test_unknown_category_rejected(self):
        result = validate_complaint(self._payload(category="Price"))

        assert result.ok is False
        assert result.field == "category"

    def test_unknown_meal_type_rejected(self):
        result = validate_complaint(self._payload(meal_type="Brunch"))

        assert result.ok is False
        assert result.field == "meal_type"

    def test_general_meal_type_allowed(self):
        assert validate_complaint(self._payload(meal_type="General")).ok is True


class TestHelpers:

    def test_ensure_valid_raises_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            ensure_valid(validate_signup("A", "a@iitkgp.ac.in", "abcdef"))

        assert exc_info.value.status_code == 400
        assert exc_info.value.details == {"field": "name"}

    def test_ensure_valid_passes_ok_result(self):
        ensure_valid(validate_login("a@iitkgp.ac.in", "secret"))

    def test_normalize_email(self):
        assert normalize_email("  A.B@IITKGP.ac.in ") == "a.b@iitkgp.ac.in"
