"""Day-of-month <-> day-of-year conversion."""

# Cumulative number of days prior to the beginning of each month (index 1..12).
_MONTH_DAYS: tuple[tuple[int, ...], tuple[int, ...]] = (
    (0, 0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334),
    (0, 0, 31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335),
)


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def day_of_month_to_day_of_year(year: int, month: int, day: int) -> int:
    """Convert a month/day pair to the day number (Feb 1 = 32).

    Raises:
        ValueError: If month is not 1-12.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be 1-12, got {month}")
    daynum = day + _MONTH_DAYS[0][month]
    if is_leap_year(year) and month > 2:
        daynum += 1
    return daynum


def day_of_year_to_day_of_month(year: int, daynum: int) -> tuple[int, int]:
    """Convert a day number to ``(month, day)``.

    Scans the cumulative table from December downward for the first month
    that starts before ``daynum``. Day 366 of a common year comes back as
    ``(12, 32)``; callers building a date roll it over to January 1.

    Raises:
        ValueError: If daynum is below 1.
    """
    if daynum < 1:
        raise ValueError(f"day of year must be >= 1, got {daynum}")
    table = _MONTH_DAYS[1 if is_leap_year(year) else 0]
    month = 12
    while daynum <= table[month]:
        month -= 1
    return month, daynum - table[month]
