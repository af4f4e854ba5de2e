"""Mapping from portable profile field names to LinkedIn field selectors."""

from typing import Dict, Iterable, List, Tuple

# Portable name -> LinkedIn field names, in the order LinkedIn expects them.
PROFILE_FIELD_MAP: Dict[str, Tuple[str, ...]] = {
    "id": ("id",),
    "name": ("first-name", "last-name"),
    "emails": ("email-address",),
}


def build_field_selector(fields: Iterable[str]) -> str:
    """Translate profile field names into LinkedIn's ``~:(...)`` selector body.

    Names missing from ``PROFILE_FIELD_MAP`` pass through unchanged so that
    LinkedIn-only fields (``headline``, ``industry``...) can still be requested.

    >>> build_field_selector(["id", "name", "headline"])
    'id,first-name,last-name,headline'
    """
    selector: List[str] = []
    for field in fields:
        selector.extend(PROFILE_FIELD_MAP.get(field, (field,)))
    return ",".join(selector)
