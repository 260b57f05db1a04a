"""Canonical serialization of a path and its query parameters."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from urllib.parse import parse_qsl, quote

SIGNATURE_PARAM = "signature"

# Query characters left as-is on the wire; `&`, `=`, `+`, `%` and `#` are always escaped.
QUERY_SAFE = "!$'()*,;:@/?"

Params = Mapping[str, str] | Iterable[tuple[str, str]]


def as_pairs(params: Params) -> list[tuple[str, str]]:
    """Normalize a mapping or an iterable of pairs to a list of pairs."""
    if isinstance(params, Mapping):
        return list(params.items())
    return list(params)


def canonical_query(params: Params) -> str:
    """
    Serialize parameters as ``key=value`` pairs joined by ``&``.

    Pairs are ordered by key (code point order, which matches UTF-8 byte
    order). The sort is stable, so duplicate keys keep their input order.
    Keys and values are used verbatim; nothing is escaped.
    """
    ordered = sorted(as_pairs(params), key=lambda pair: pair[0])
    return "&".join(f"{key}={value}" for key, value in ordered)


def encode_query(params: Params) -> str:
    """
    Serialize parameters in canonical order, percent-encoded for a URL.

    Decoding the result with ``parse_query`` yields exactly the pairs that
    ``canonical_query`` signs.
    """
    ordered = sorted(as_pairs(params), key=lambda pair: pair[0])
    return "&".join(
        f"{quote(key, safe=QUERY_SAFE)}={quote(value, safe=QUERY_SAFE)}" for key, value in ordered
    )


def canonicalize(path: str, params: Params) -> str:
    """Build the canonical ``path?query`` string, or ``path`` alone when there is no query."""
    query = canonical_query(params)
    if not query:
        return path
    return f"{path}?{query}"


def parse_query(query_string: str) -> list[tuple[str, str]]:
    """
    Split a raw query string into ordered ``(key, value)`` pairs.

    Duplicates and blank values are kept. Percent-escapes are decoded and
    ``+`` becomes a space, matching form encoding.
    """
    if not query_string:
        return []
    return parse_qsl(query_string, keep_blank_values=True)


def split_signature(
    pairs: Iterable[tuple[str, str]],
    name: str = SIGNATURE_PARAM,
) -> tuple[str | None, list[tuple[str, str]]]:
    """
    Separate the signature from the other parameters.

    Returns the first value under ``name`` (or None) and every pair whose
    key is not exactly ``name``, in their original order.
    """
    signature: str | None = None
    others: list[tuple[str, str]] = []
    for key, value in pairs:
        if key == name:
            if signature is None:
                signature = value
            continue
        others.append((key, value))
    return signature, others
