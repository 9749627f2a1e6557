"""
Academic year arithmetic. An academic year opens in September and is identified by
the calendar year in which it opens.
"""
import datetime

SEPTEMBER = 9


def current_academic_year(today: datetime.date | None = None) -> int:
    today = today or datetime.date.today()
    return today.year if today.month >= SEPTEMBER else today.year - 1


def scraping_window(current_year: int, years_per_degree: int) -> list[int]:
    """
    The enrollment years worth scraping, oldest first.

    Students don't usually apply for a Master's degree during their first or second
    year, so the current and previous academic years are left out.
    """
    previous_year = current_year - 1
    return list(range(previous_year - years_per_degree, previous_year))
