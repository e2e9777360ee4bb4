from datetime import date

from skateroom.schemas.profile import ProfileRead
from skateroom.services.profile_service import build_profile_stats
from skateroom.services.profile_stats import calculate_age, calculate_skating_duration


def test_age_is_decremented_before_the_birthday() -> None:
    assert calculate_age(date(2000, 6, 15), today=date(2024, 6, 14)) == 23


def test_age_increments_on_the_birthday() -> None:
    assert calculate_age(date(2000, 6, 15), today=date(2024, 6, 15)) == 24


def test_age_without_birth_date_is_zero() -> None:
    assert calculate_age(None, today=date(2024, 6, 15)) == 0


def test_skating_duration_years_and_months() -> None:
    assert calculate_skating_duration(date(2023, 1, 1), today=date(2024, 3, 1)) == "1 years, 2 months"


def test_skating_duration_whole_years() -> None:
    assert calculate_skating_duration(date(2023, 1, 1), today=date(2024, 1, 1)) == "1 years"


def test_skating_duration_months_only() -> None:
    assert calculate_skating_duration(date(2023, 6, 1), today=date(2023, 9, 1)) == "3 months"


def test_skating_duration_borrows_a_year_when_month_is_earlier() -> None:
    assert calculate_skating_duration(date(2022, 11, 1), today=date(2024, 2, 1)) == "1 years, 3 months"


def test_skating_duration_without_start_date() -> None:
    assert calculate_skating_duration(None) == "0 months"


def test_profile_stats_combine_both_fields() -> None:
    profile = ProfileRead(id="u1", date_of_birth=date(2000, 6, 15), skating_since=date(2023, 6, 1))
    stats = build_profile_stats(profile, today=date(2023, 9, 1))
    assert stats.age == 23
    assert stats.skating_duration == "3 months"
