import math
import re

_WHITESPACE = re.compile(r"\s")


def parse_amount(value: str) -> float:
    """
    Convert a user-entered amount to a number.

    All whitespace is removed first, so "1 000" reads as 1000. Empty input and
    non-numeric text give NaN; callers must treat NaN as invalid.
    """
    if value is None or value.strip() == "":
        return math.nan
    compact = _WHITESPACE.sub("", value)
    # float() accepts digit separators that a form field should not
    if "_" in compact:
        return math.nan
    try:
        return float(compact)
    except ValueError:
        return math.nan


def is_valid_amount(amount: float) -> bool:
    """True for finite, strictly positive amounts."""
    return math.isfinite(amount) and amount > 0


# Narrow no-break space, as fr-FR number formatting emits
THOUSANDS_SEPARATOR = "\u202f"


def format_amount(amount: float) -> str:
    """Format an amount with French thousands grouping, e.g. 14 000 000."""
    if float(amount).is_integer():
        return f"{int(amount):,}".replace(",", THOUSANDS_SEPARATOR)
    return f"{amount:,.2f}".replace(",", THOUSANDS_SEPARATOR).replace(".", ",")
