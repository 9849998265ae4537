import hashlib
import json
from typing import Any

DELIVERY_CACHE_CONTROL_VALUE = "no-cache"


def build_etag(payload: dict[str, Any]) -> str:
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    return f'"{hashlib.sha256(encoded.encode("utf-8")).hexdigest()[:32]}"'


def _split_if_none_match(header_value: str) -> list[str]:
    tokens: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in header_value:
        if char == '"':
            in_quotes = not in_quotes
        if char == "," and not in_quotes:
            tokens.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    tokens.append("".join(current).strip())
    return [token for token in tokens if token]


def _strip_weak(tag: str) -> str:
    return tag[2:] if tag.startswith("W/") else tag


def etag_matches(if_none_match: str | None, etag: str) -> bool:
    if not if_none_match:
        return False
    expected = _strip_weak(etag)
    for token in _split_if_none_match(if_none_match):
        if token == "*" or _strip_weak(token) == expected:
            return True
    return False
