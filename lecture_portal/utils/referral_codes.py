"""
Referral codes tie a referral manager to a lecture: ``<managerId>-<lectureId>``.

The token is plain text, neither signed nor encrypted. Identifiers that
contain the separator are refused when encoding, so any code produced here
splits back into exactly the ids it was built from.
"""

from typing import NamedTuple, Optional
from urllib.parse import urlencode

SEPARATOR = "-"

# Name under which a pending code is kept between the referral link and signup
STORAGE_KEY = "referralCode"


class ReferralCode(NamedTuple):
    manager_id: str
    lecture_id: str


def encode(manager_id: str, lecture_id: str) -> str:
    for label, value in (("manager id", manager_id), ("lecture id", lecture_id)):
        if not value:
            raise ValueError(f"{label} must not be empty")
        if SEPARATOR in value:
            raise ValueError(f"{label} must not contain {SEPARATOR!r}: {value!r}")
    return f"{manager_id}{SEPARATOR}{lecture_id}"


def decode(code: Optional[str]) -> Optional[ReferralCode]:
    """Split a code into its ids, or return None when it is malformed."""
    if not code:
        return None
    parts = code.split(SEPARATOR)
    if len(parts) != 2 or not all(parts):
        return None
    return ReferralCode(manager_id=parts[0], lecture_id=parts[1])


def validate(code: Optional[str]) -> bool:
    return decode(code) is not None


def get_lecture_id_from_code(code: Optional[str]) -> Optional[str]:
    decoded = decode(code)
    return decoded.lecture_id if decoded else None


def generate_link(manager_id: str, lecture_id: str, base_url: str) -> str:
    query = urlencode({"ref": encode(manager_id, lecture_id)})
    return f"{base_url.rstrip('/')}/signup?{query}"
