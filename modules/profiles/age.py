"""Age derivation from a birthday."""

from datetime import date


def calculate_age(birthday: date, today: date) -> int:
    """
    Whole years between `birthday` and `today`.

    A year only counts once today's month/day reaches the birth month/day,
    so the day before a birthday still reports the previous age. A 29
    February birthday is reached on 1 March in common years.
    """
    return today.year - birthday.year - ((today.month, today.day) < (birthday.month, birthday.day))
