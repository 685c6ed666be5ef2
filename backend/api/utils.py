from typing import Any


def _parse_title(payload: Any) -> Any:
    """
    Pull the raw ``title`` out of a JSON request body.

    Returns ``None`` when the body is missing, malformed or not an object;
    trimming and validation happen in the store.
    """
    if not isinstance(payload, dict):
        return None
    return payload.get("title")
