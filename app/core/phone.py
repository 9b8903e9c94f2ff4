"""
Phone number identity helpers.

Participants and staff log in with a phone number, but Supabase Auth keys
accounts by email. Every phone is reduced to canonical digits and mapped to a
deterministic pseudo-email so formatting differences never split one phone
into two accounts.
"""
import re

from app.config import settings
from app.core.exceptions import InvalidPhoneNumber

_NON_DIGITS = re.compile(r"\D")


def normalize_phone_to_digits(phone: str) -> str:
    """
    Normalize a phone number to digits only.

    - Strip all non-digits
    - A leading "0" is a locally dialed number: replace it with the default country code
    - Result must be between phone_min_digits and phone_max_digits long
    """
    digits = _NON_DIGITS.sub("", phone or "")

    if digits.startswith("0"):
        digits = settings.phone_default_country_code + digits[1:]

    if not settings.phone_min_digits <= len(digits) <= settings.phone_max_digits:
        raise InvalidPhoneNumber(
            f"Phone number must be between {settings.phone_min_digits} and "
            f"{settings.phone_max_digits} digits after normalization"
        )

    return digits


def phone_to_email(phone: str) -> str:
    """Pseudo-email used as the Supabase Auth identity. The letter prefix keeps validators from rejecting an all-numeric local part."""
    digits = normalize_phone_to_digits(phone)
    return f"{settings.phone_email_prefix}{digits}@{settings.phone_email_domain}"
