from typing import Dict, List, Sequence, Tuple
from urllib.parse import unquote


def split_query(query_text: str) -> List[Tuple[str, str]]:
    """Split a raw query string into (key, value) pairs.

    Everything up to and including the first "?" is discarded; without a
    "?" the whole text is treated as the query. Entries that do not contain
    exactly one "=" are dropped. Only the value is percent-decoded, keys are
    kept verbatim. Other producers of key URIs depend on this leniency, so
    malformed entries are skipped rather than reported.

    Args:
        query_text: Query component, with or without the leading "?".

    Returns:
        Pairs in the order they appear.
    """
    query_text = query_text[query_text.find("?") + 1:]

    pairs = []
    for entry in query_text.split("&"):
        parts = entry.split("=")
        if len(parts) == 2:
            pairs.append((parts[0], unquote(parts[1])))

    return pairs


def query_map(pairs: Sequence[Tuple[str, str]]) -> Dict[str, str]:
    """Build a lookup map from split pairs; a repeated key keeps its last value."""
    return dict(pairs)
