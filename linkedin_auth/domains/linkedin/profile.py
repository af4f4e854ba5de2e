"""Normalized LinkedIn profile.

LinkedIn answers the people API with camelCase JSON:

    {"emailAddress": "...", "firstName": "Jared", "id": "_XX0XXX00X", "lastName": "Hanson"}

``normalize`` turns that body into a ``Profile`` shared with other providers'
strategies (provider, id, display name, structured name, emails).
"""

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from linkedin_auth.core.exceptions import ProfileParseError

PROVIDER = "linkedin"


class ProfileName(BaseModel):
    """Structured name."""

    model_config = ConfigDict(frozen=True)

    family_name: Optional[str] = None
    given_name: Optional[str] = None


class ProfileEmail(BaseModel):
    """A single email address record."""

    model_config = ConfigDict(frozen=True)

    value: str


class Profile(BaseModel):
    """User profile built fresh for each fetch and handed to the verify callback."""

    model_config = ConfigDict(frozen=True)

    provider: str = PROVIDER
    id: Optional[str] = None
    display_name: str = ""
    name: ProfileName = Field(default_factory=ProfileName)
    emails: Optional[List[ProfileEmail]] = Field(
        None, description="Present only when the response carried an email address"
    )
    raw: str = Field(..., description="Response body exactly as received")
    raw_json: Dict[str, Any] = Field(..., description="Parsed response body")

    def to_dict(self) -> Dict[str, Any]:
        """Render the portable camelCase shape, omitting ``emails`` when absent."""
        data: Dict[str, Any] = {
            "provider": self.provider,
            "id": self.id,
            "displayName": self.display_name,
            "name": {
                "familyName": self.name.family_name,
                "givenName": self.name.given_name,
            },
            "_raw": self.raw,
            "_json": self.raw_json,
        }
        if self.emails is not None:
            data["emails"] = [{"value": email.value} for email in self.emails]
        return data


def _display_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    # Missing parts are left out rather than rendered as placeholders.
    return " ".join(part for part in (first_name, last_name) if part)


def normalize(raw_body: str) -> Profile:
    """Parse a LinkedIn profile response body.

    Raises:
        ProfileParseError: If the body is not valid JSON or not a JSON object.
    """
    try:
        data = json.loads(raw_body)
    except (TypeError, ValueError) as e:
        raise ProfileParseError(f"Failed to parse LinkedIn profile: {e}", raw=raw_body) from e

    if not isinstance(data, dict):
        raise ProfileParseError(
            f"Expected a JSON object for LinkedIn profile, got {type(data).__name__}",
            raw=raw_body,
        )

    profile_id = data.get("id")
    email_address = data.get("emailAddress")

    try:
        name = ProfileName(family_name=data.get("lastName"), given_name=data.get("firstName"))
        return Profile(
            id=str(profile_id) if profile_id is not None else None,
            display_name=_display_name(name.given_name, name.family_name),
            name=name,
            emails=[ProfileEmail(value=email_address)] if email_address else None,
            raw=raw_body,
            raw_json=data,
        )
    except ValidationError as e:
        raise ProfileParseError(f"Unexpected LinkedIn profile shape: {e}", raw=raw_body) from e
