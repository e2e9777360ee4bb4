from __future__ import annotations

from datetime import date


def calculate_age(birth_date: date | None, today: date | None = None) -> int:
    if birth_date is None:
        return 0
    today = today or date.today()
    age = today.year - birth_date.year
    # Birthday not reached yet this year.
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def calculate_skating_duration(start_date: date | None, today: date | None = None) -> str:
    """Whole years and months skated, e.g. "1 years, 2 months".

    Days are ignored; only the calendar months are compared.
    """

    if start_date is None:
        return "0 months"
    today = today or date.today()
    years = today.year - start_date.year
    months = today.month - start_date.month
    if months < 0:
        years -= 1
        months += 12

    if years == 0:
        return f"{months} months"
    if months == 0:
        return f"{years} years"
    return f"{years} years, {months} months"
