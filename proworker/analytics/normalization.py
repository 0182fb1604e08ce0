"""
Canonical forms for free-text gender and profession.

Every peer comparison joins on these forms only; comparing raw stored
strings silently fragments the peer groups ("Plumber " vs "plumber").
"""
import enum
from typing import Optional

UNKNOWN_PROFESSION = "unknown"


class Gender(str, enum.Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


_GENDER_ALIASES = {
    "male": Gender.MALE,
    "m": Gender.MALE,
    "female": Gender.FEMALE,
    "f": Gender.FEMALE,
}


def normalize_gender(raw: Optional[str]) -> Gender:
    """Map "male"/"m" and "female"/"f" (any case) to Male/Female, anything else to Other."""
    if not raw:
        return Gender.OTHER
    return _GENDER_ALIASES.get(raw.strip().lower(), Gender.OTHER)


def normalize_profession(raw: Optional[str]) -> str:
    """Lower-cased, trimmed profession; "unknown" when missing or blank."""
    if not raw or not raw.strip():
        return UNKNOWN_PROFESSION
    return raw.strip().lower()
