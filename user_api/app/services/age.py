"""Age calculation."""

from datetime import date
from enum import Enum
from typing import Optional, Union


class AgePolicy(str, Enum):
    """How to decide whether this year's birthday has been reached.

    ``CALENDAR`` compares (month, day) pairs.  ``DAY_OF_YEAR`` compares
    the ordinal day of the year, which is how ages were computed before
    and is kept for clients that depend on it: the anniversary shifts by
    one day whenever exactly one of the two years is a leap year, so
    someone born on 1990-05-11 (day 131) is already 34 on 2024-05-10
    (day 131), and someone born on 2000-03-01 (day 61) is still 22 on
    2023-03-01 (day 60).
    """

    CALENDAR = "calendar"
    DAY_OF_YEAR = "day_of_year"


def calculate_age(
    dob: date,
    today: Optional[date] = None,
    policy: Union[AgePolicy, str] = AgePolicy.CALENDAR,
) -> int:
    """Return the age in whole years of someone born on ``dob``.

    The year difference is reduced by one when ``today`` falls before
    this year's birthday as decided by ``policy``.  ``today`` defaults
    to the current local date.
    """
    if today is None:
        today = date.today()
    policy = AgePolicy(policy)
    age = today.year - dob.year
    if policy is AgePolicy.DAY_OF_YEAR:
        before_birthday = today.timetuple().tm_yday < dob.timetuple().tm_yday
    else:
        before_birthday = (today.month, today.day) < (dob.month, dob.day)
    if before_birthday:
        age -= 1
    return age
