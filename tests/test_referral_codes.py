from urllib.parse import parse_qs, urlparse

import pytest

from lecture_portal.utils import referral_codes
from lecture_portal.utils.referral_codes import ReferralCode


def test_encode_joins_ids():
    assert referral_codes.encode("rm1", "l42") == "rm1-l42"


def test_decode_splits_ids():
    assert referral_codes.decode("rm1-l42") == ReferralCode(manager_id="rm1", lecture_id="l42")


@pytest.mark.parametrize("code", ["", None, "onlyonepart", "-l42", "rm1-", "-", "a-b-c"])
def test_decode_rejects_malformed_codes(code):
    assert referral_codes.decode(code) is None
    assert referral_codes.validate(code) is False


@pytest.mark.parametrize(
    "manager_id, lecture_id",
    [("rm7", "l99"), ("0f3a9c", "b81e22d4"), ("manager_one", "lecture.7")],
)
def test_decode_inverts_encode(manager_id, lecture_id):
    decoded = referral_codes.decode(referral_codes.encode(manager_id, lecture_id))
    assert decoded == (manager_id, lecture_id)


@pytest.mark.parametrize("manager_id, lecture_id", [("rm-1", "l42"), ("rm1", "l-42"), ("", "l42"), ("rm1", "")])
def test_encode_refuses_ambiguous_ids(manager_id, lecture_id):
    with pytest.raises(ValueError):
        referral_codes.encode(manager_id, lecture_id)


def test_get_lecture_id_from_code():
    assert referral_codes.get_lecture_id_from_code("rm1-l42") == "l42"
    assert referral_codes.get_lecture_id_from_code("garbage") is None


def test_generate_link_embeds_code_as_ref_param():
    link = referral_codes.generate_link("rm7", "l99", "https://lectures.portal.io/")
    parsed = urlparse(link)

    assert link == "https://lectures.portal.io/signup?ref=rm7-l99"
    assert parsed.path == "/signup"
    assert parse_qs(parsed.query) == {"ref": ["rm7-l99"]}
