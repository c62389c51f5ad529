from typing import Any, Dict, Optional

from bson import json_util


def parse_query(query: Optional[str]) -> Dict[str, Any]:
    """
    Parses query text into a MongoDB filter document.

    Accepts MongoDB Extended JSON (relaxed or canonical), so typed values can be
    written inline, e.g. {"_id": {"$oid": "..."}} or {"ts": {"$gte": {"$date": "2024-01-01T00:00:00Z"}}}.
    Blank text is the empty filter (matches every document).

    Raises:
        ValueError: if the text is not valid JSON or is not a document.
    """
    if query is None or not query.strip():
        return {}

    parsed = json_util.loads(query)
    if not isinstance(parsed, dict):
        raise ValueError(f"Query must be a JSON document, got {type(parsed).__name__}")
    return parsed
