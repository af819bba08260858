"""
Contact phone normalisation.

Raw keyboard input is reshaped into the canonical ``(XXX) XXX-XXXX`` form on
every keystroke, so partial masks such as ``(555`` are valid intermediate
values. Only the fully masked form passes validation.
"""
import re

PHONE_MASK = "(XXX) XXX-XXXX"

_CANONICAL_PHONE = re.compile(r"\(\d{3}\) \d{3}-\d{4}", re.ASCII)
_NON_DIGITS = re.compile(r"[^0-9]")


def phone_digits(value: str) -> str:
    """Return only the ASCII decimal digits of ``value``."""
    return _NON_DIGITS.sub("", value)


def format_phone_number(raw: str) -> str:
    """Map the digits of ``raw`` onto PHONE_MASK, stopping when digits run out."""
    digits = phone_digits(raw)
    result: list[str] = []
    index = 0
    for ch in PHONE_MASK:
        if index >= len(digits):
            break
        if ch == "X":
            result.append(digits[index])
            index += 1
        else:
            result.append(ch)
    return "".join(result)


def is_valid_phone_number(value: str) -> bool:
    """True iff ``value`` is exactly in canonical ``(DDD) DDD-DDDD`` form."""
    return _CANONICAL_PHONE.fullmatch(value) is not None
