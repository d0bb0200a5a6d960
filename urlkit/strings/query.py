from collections.abc import Iterable

QueryPair = tuple[str, str | None]
"""
A single `key=value` of the query, where `None` means that the key was given
without a value (`?key` or `?key=`).
"""


def decode_query(query_string: str | None) -> list[QueryPair] | None:
    """
    Split a query string (without its leading "?") into ordered pairs.

    - Empty segments (from "&&" or a leading or trailing "&") are dropped.
    - Each segment is split on its first "=" only.
    - Duplicate keys are kept, in order; they are never merged.
    - No percent-decoding is performed: values are kept verbatim.
    """
    if query_string is None:
        return None

    pairs: list[QueryPair] = []
    for segment in query_string.split("&"):
        if not segment:
            continue
        key, _, value = segment.partition("=")
        pairs.append((key, value or None))
    return pairs


def encode_query(pairs: Iterable[QueryPair] | None) -> str:
    """
    Inverse of `decode_query`: a pair without a value is rendered as a bare key,
    with no trailing "=".
    """
    if not pairs:
        return ""
    return "&".join(key if value is None else f"{key}={value}" for key, value in pairs)


def find_query_value(pairs: Iterable[QueryPair], key: str) -> str | None:
    for pair_key, pair_value in pairs:
        if pair_key == key:
            return pair_value
    return None
