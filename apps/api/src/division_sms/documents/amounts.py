"""
Amount formatting for printable documents.

    >>> format_amount_in_words(Decimal("1200.50"))
    'ONE THOUSAND TWO HUNDRED & 50/100'
    >>> format_peso(Decimal("1234.5"))
    '₱1,234.50'
"""

from decimal import ROUND_HALF_UP, Decimal

_ONES = (
    "",
    "one",
    "two",
    "three",
    "four",
    "five",
    "six",
    "seven",
    "eight",
    "nine",
    "ten",
    "eleven",
    "twelve",
    "thirteen",
    "fourteen",
    "fifteen",
    "sixteen",
    "seventeen",
    "eighteen",
    "nineteen",
)
_TENS = ("", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety")

_SCALES = ((1_000_000, "million"), (1_000, "thousand"), (100, "hundred"))

MAX_AMOUNT_IN_WORDS = 1_000_000_000

CENT = Decimal("0.01")


def to_decimal(value: Decimal | float | int | str | None) -> Decimal:
    """Coerce a stored amount to a 2-place Decimal. None is zero."""
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def number_to_words(num: int) -> str:
    """Lowercase English words for a whole number below one billion."""
    if num < 0 or num >= MAX_AMOUNT_IN_WORDS:
        raise ValueError(f"Cannot spell out {num}")
    if num == 0:
        return "zero"
    if num < 20:
        return _ONES[num]
    if num < 100:
        tens, ones = divmod(num, 10)
        return _TENS[tens] + (f" {_ONES[ones]}" if ones else "")

    for scale, word in _SCALES:
        if num >= scale:
            head, remainder = divmod(num, scale)
            words = f"{number_to_words(head)} {word}"
            if remainder:
                words += f" {number_to_words(remainder)}"
            return words

    return ""


def format_amount_in_words(amount: Decimal | float | int | str | None) -> str:
    """Uppercase words, with cents as "& NN/100" when there are any."""
    value = to_decimal(amount)
    whole = int(value)
    cents = int((value - whole) * 100)

    words = number_to_words(whole).upper()
    if cents > 0:
        words += f" & {cents}/100"
    return words


def format_amount(amount: Decimal | float | int | str | None) -> str:
    """Thousands separators and two decimals, e.g. "1,234.50"."""
    return f"{to_decimal(amount):,.2f}"


def format_peso(amount: Decimal | float | int | str | None) -> str:
    return f"₱{format_amount(amount)}"
