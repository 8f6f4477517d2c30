"""
Shared field rules for request payloads.
"""

from pydantic import ValidationInfo


def confirmed(value: str, info: ValidationInfo, field: str = "password") -> str:
    """Raise unless value equals the already-validated `field` of the payload."""
    original = info.data.get(field)
    if original is not None and value != original:
        raise ValueError(f"The {field.replace('_', ' ')} confirmation does not match.")
    return value
