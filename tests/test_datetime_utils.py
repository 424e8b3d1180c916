from datetime import date

import pytest

from src.workforce_dashboard.workforce_dashboard.common.datetime_utils import (
    is_current_month,
    month_bounds,
    parse_iso_date,
    recent_months,
)
from src.workforce_dashboard.workforce_dashboard.common.validators import (
    optional_text,
    require_email,
    require_non_empty,
    require_positive_int,
)
from src.workforce_dashboard.workforce_dashboard.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "month, expected",
    [
        ("2026-01", (date(2026, 1, 1), date(2026, 1, 31))),
        ("2024-02", (date(2024, 2, 1), date(2024, 2, 29))),
        ("2026-04", (date(2026, 4, 1), date(2026, 4, 30))),
    ],
)
def test_month_bounds_are_inclusive_calendar_days(month, expected):
    assert month_bounds(month) == expected


def test_is_current_month():
    assert is_current_month("2026-10", date(2026, 10, 31))
    assert not is_current_month("2025-10", date(2026, 10, 1))


def test_recent_months_wrap_year():
    months = recent_months(date(2026, 2, 10), 3)

    assert months == [("2026-02", "February 2026"), ("2026-01", "January 2026"), ("2025-12", "December 2025")]


def test_parse_errors_become_validation_errors():
    with pytest.raises(ValidationError):
        parse_iso_date("2026-13-01")
    with pytest.raises(ValidationError):
        month_bounds("")


def test_require_positive_int():
    assert require_positive_int("7", "Amount") == 7
    with pytest.raises(ValidationError, match="at least 1"):
        require_positive_int(0, "Amount")


def test_require_email_lowercases():
    assert require_email(" Foo@Bar.COM ") == "foo@bar.com"


@pytest.mark.parametrize("value", [2.7, True, "2.5", None])
def test_require_positive_int_rejects_non_whole_numbers(value):
    with pytest.raises(ValidationError, match="whole number"):
        require_positive_int(value, "Amount")


def test_require_non_empty_rejects_non_text():
    with pytest.raises(ValidationError, match="must be text"):
        require_non_empty(123, "Item name")


def test_optional_text_accepts_numbers():
    assert optional_text(42) == "42"
    assert optional_text("  ") is None
