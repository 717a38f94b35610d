"""Validation helpers for the edit-form boundary.

The store tolerates anything these helpers reject; they exist for the
shell (and the HTTP routes) to run before submitting a mutation.
"""

import re
from collections import Counter

from pydantic import BaseModel

from journeygraph.models.base import null_required_fields
from journeygraph.models.journey import Journey
from journeygraph.models.property import PropertyCreate, PropertyUpdate

PROPERTY_KEY_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


def is_valid_string(value: str | None) -> bool:
    """Non-empty after trimming."""
    return bool(value and value.strip())


def is_valid_property_key(key: str) -> bool:
    """Letters, digits and underscores, starting with a letter."""
    return bool(PROPERTY_KEY_PATTERN.match(key))


def duplicate_property_keys(journey: Journey) -> list[str]:
    """Keys used by more than one property, in first-seen order."""
    counts = Counter(prop.key for prop in journey.properties)
    seen: list[str] = []
    for prop in journey.properties:
        if counts[prop.key] > 1 and prop.key not in seen:
            seen.append(prop.key)
    return seen


def validate_property(
    data: PropertyCreate | PropertyUpdate,
    journey: Journey,
    editing_id: str | None = None,
) -> list[str]:
    """Check a property form submission against the current journey.

    Args:
        data: the submitted fields; unset fields of an update are skipped.
        journey: snapshot used for the key uniqueness check.
        editing_id: id of the property being edited, excluded from the
            uniqueness check.

    Returns:
        human-readable problems, empty when the submission is acceptable.
    """
    problems: list[str] = []
    key = data.key
    if key is None:
        return problems

    if not is_valid_property_key(key):
        problems.append(
            f"Invalid property key {key!r}: must start with a letter and "
            "contain only letters, digits and underscores"
        )

    for prop in journey.properties:
        if prop.key != key:
            continue
        if editing_id and prop.id == editing_id:
            continue
        problems.append(f"Property key {key!r} is already in use")
        break

    return problems


def validate_name(name: str | None, label: str) -> list[str]:
    """Required-name check for node, function and mapping forms.

    None means the field was not submitted (a partial update) and passes.
    """
    if name is None or is_valid_string(name):
        return []
    return [f"{label} name must not be blank"]


def validate_no_nulls(update: BaseModel, model_type: type[BaseModel], label: str) -> list[str]:
    """Reject explicit nulls on fields the entity requires.

    Clearing is only possible for fields that default to None, such as a
    node's `x`/`y` or a property's `validationCondition`.
    """
    return [
        f"{label} field {name!r} cannot be null"
        for name in null_required_fields(model_type, update)
    ]
