"""Unit tests for LinkedIn profile normalization."""

import json
from dataclasses import dataclass
from typing import List, Optional

import pytest

from linkedin_auth.core.exceptions import ProfileParseError
from linkedin_auth.domains.linkedin.profile import Profile, normalize

BASIC_BODY = '{"firstName": "Jared", "id": "_XX0XXX00X", "lastName": "Hanson"}'
EMAIL_BODY = (
    '{"emailAddress": "jaredhanson@example.com", "firstName": "Jared", '
    '"id": "_XX0XXX00X", "lastName": "Hanson"}'
)


def test_normalize_basic_profile():
    profile = normalize(BASIC_BODY)

    assert profile.provider == "linkedin"
    assert profile.id == "_XX0XXX00X"
    assert profile.display_name == "Jared Hanson"
    assert profile.name.family_name == "Hanson"
    assert profile.name.given_name == "Jared"
    assert profile.emails is None
    assert profile.raw == BASIC_BODY
    assert profile.raw_json == json.loads(BASIC_BODY)


def test_normalize_profile_with_email():
    profile = normalize(EMAIL_BODY)

    assert [email.value for email in profile.emails] == ["jaredhanson@example.com"]
    assert profile.display_name == "Jared Hanson"


def test_normalize_keeps_extra_fields_in_raw_json():
    body = '{"id": "_XX0XXX00X", "headline": "Developer", "industry": "Internet"}'
    profile = normalize(body)

    assert profile.raw_json["headline"] == "Developer"
    assert profile.raw_json["industry"] == "Internet"


@dataclass
class NameCase:
    desc: str
    body: dict
    expected_display_name: str
    expected_given: Optional[str]
    expected_family: Optional[str]


NAME_CASES = [
    NameCase("first name only", {"id": "1", "firstName": "Jared"}, "Jared", "Jared", None),
    NameCase("last name only", {"id": "1", "lastName": "Hanson"}, "Hanson", None, "Hanson"),
    NameCase("no name", {"id": "1"}, "", None, None),
    NameCase("empty first name", {"id": "1", "firstName": "", "lastName": "Hanson"}, "Hanson", "", "Hanson"),
]


@pytest.mark.parametrize("case", NAME_CASES, ids=lambda c: c.desc)
def test_normalize_missing_name_parts(case: NameCase):
    profile = normalize(json.dumps(case.body))

    assert profile.display_name == case.expected_display_name
    assert profile.name.given_name == case.expected_given
    assert profile.name.family_name == case.expected_family


@dataclass
class IdCase:
    desc: str
    body: str
    expected_id: Optional[str]


ID_CASES = [
    IdCase("string id", '{"id": "_XX0XXX00X"}', "_XX0XXX00X"),
    IdCase("numeric id rendered as string", '{"id": 42}', "42"),
    IdCase("missing id", '{"firstName": "Jared"}', None),
]


@pytest.mark.parametrize("case", ID_CASES, ids=lambda c: c.desc)
def test_normalize_id(case: IdCase):
    assert normalize(case.body).id == case.expected_id


@dataclass
class BadBodyCase:
    desc: str
    body: str


BAD_BODY_CASES = [
    BadBodyCase("not json", "<html>Service Unavailable</html>"),
    BadBodyCase("empty body", ""),
    BadBodyCase("json array", '["_XX0XXX00X"]'),
    BadBodyCase("json string", '"Jared"'),
    BadBodyCase("non-string first name", '{"id": "1", "firstName": {"localized": "Jared"}}'),
]


@pytest.mark.parametrize("case", BAD_BODY_CASES, ids=lambda c: c.desc)
def test_normalize_rejects_bad_bodies(case: BadBodyCase):
    with pytest.raises(ProfileParseError) as exc_info:
        normalize(case.body)
    assert exc_info.value.raw == case.body


def test_profile_is_immutable():
    profile = normalize(BASIC_BODY)
    with pytest.raises(Exception):
        profile.id = "other"


@dataclass
class ToDictCase:
    desc: str
    body: str
    expected_emails: Optional[List[dict]]


TO_DICT_CASES = [
    ToDictCase("without email", BASIC_BODY, None),
    ToDictCase("with email", EMAIL_BODY, [{"value": "jaredhanson@example.com"}]),
]


@pytest.mark.parametrize("case", TO_DICT_CASES, ids=lambda c: c.desc)
def test_profile_to_dict(case: ToDictCase):
    data = normalize(case.body).to_dict()

    assert data["provider"] == "linkedin"
    assert data["id"] == "_XX0XXX00X"
    assert data["displayName"] == "Jared Hanson"
    assert data["name"] == {"familyName": "Hanson", "givenName": "Jared"}
    assert data["_raw"] == case.body
    assert data["_json"] == json.loads(case.body)
    if case.expected_emails is None:
        assert "emails" not in data
    else:
        assert data["emails"] == case.expected_emails


def test_profiles_are_independent():
    first = normalize(EMAIL_BODY)
    second = normalize(BASIC_BODY)

    assert isinstance(first, Profile)
    assert first.emails is not None
    assert second.emails is None
