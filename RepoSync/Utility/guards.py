"""Type guards for values read out of parsed JSON/YAML/TOML documents.

Parsed config content is untrusted: every field goes through one of these
helpers before it is used, and a value of the wrong shape is reported as
absent (``None``) rather than coerced.
"""
from typing import Any, Dict, List, Optional


def as_mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_text(value: Any) -> Optional[str]:
    """Return ``value`` when it is a non-blank string, else ``None``."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def as_text_list(value: Any) -> Optional[List[str]]:
    """Return a copy of ``value`` when it is a list made only of strings.

    An empty list is a valid (present) value. A list with any non-string
    element is rejected as a whole.
    """
    if not isinstance(value, (list, tuple)):
        return None
    if not all(isinstance(item, str) for item in value):
        return None
    return list(value)


def split_delimited(value: Any, delimiter: str = ",") -> Optional[List[str]]:
    """Split a delimited string into trimmed, non-empty tokens."""
    if not isinstance(value, str) or not value.strip():
        return None
    return [token.strip() for token in value.split(delimiter) if token.strip()]


def first_present(*values: Optional[Any]) -> Optional[Any]:
    for value in values:
        if value is not None:
            return value
    return None
