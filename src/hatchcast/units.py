"""Temperature conversion helpers.

Pure conversion functions with no external dependencies.
"""

from __future__ import annotations


def _check_precision(precision: int) -> None:
    if not 0 <= precision <= 15:
        msg = "Precision must be between 0 and 15"
        raise ValueError(msg)


def c_to_f(celsius: float, precision: int = 1) -> float:
    """Convert Celsius to Fahrenheit, rounded to ``precision`` decimal places."""
    _check_precision(precision)
    return round(celsius * 9 / 5 + 32, precision)


def f_to_c(fahrenheit: float, precision: int = 1) -> float:
    """Convert Fahrenheit to Celsius, rounded to ``precision`` decimal places."""
    _check_precision(precision)
    return round((fahrenheit - 32) * 5 / 9, precision)
