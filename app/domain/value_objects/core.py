"""Domain value objects for the participant portal.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass
from typing import ClassVar

# Separators people type into phone numbers; everything else must be a digit.
_PHONE_SEPARATORS_RE = re.compile(r"[\s().+-]")
_DIGITS_RE = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class PhoneNumber:
    """Value object for a US phone number, stored as DDD-DDD-DDDD.

    Accepts common separators on input; exactly 10 digits must remain.
    Use PhoneNumber.parse() for raw user input.
    """

    value: str

    _FORMAT_RE: ClassVar[re.Pattern[str]] = re.compile(r"^[0-9]{3}-[0-9]{3}-[0-9]{4}$")

    def __post_init__(self) -> None:
        if not self._FORMAT_RE.match(self.value):
            raise ValueError("Phone number must be exactly 10 digits")

    @classmethod
    def parse(cls, raw: str) -> "PhoneNumber":
        """Strip separators, require 10 digits, and reformat to DDD-DDD-DDDD."""
        digits = _PHONE_SEPARATORS_RE.sub("", raw)
        if len(digits) != 10 or not _DIGITS_RE.match(digits):
            raise ValueError("Phone number must be exactly 10 digits")
        return cls(f"{digits[:3]}-{digits[3:6]}-{digits[6:]}")


@dataclass(frozen=True)
class ZipCode:
    """Value object for a 5-digit US zip code."""

    value: str

    def __post_init__(self) -> None:
        if len(self.value) != 5 or not _DIGITS_RE.match(self.value):
            raise ValueError("Zip code must be exactly 5 digits")


@dataclass(frozen=True)
class NewPassword:
    """Value object for a password being set (signup, creation, reset)."""

    value: str

    MIN_LENGTH: ClassVar[int] = 8

    def __post_init__(self) -> None:
        if len(self.value) < self.MIN_LENGTH:
            raise ValueError(
                f"Password must be at least {self.MIN_LENGTH} characters long"
            )
