"""
Listing helpers - text search and pagination over small result lists.

The listing queries already come back filtered, sorted and limited from
MongoDB; these helpers only narrow and slice what is in memory.
"""

from typing import Any, Iterable, List, Mapping, Sequence, Tuple


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple, set)):
        return " ".join(str(item) for item in value)
    return str(value)


def matches_search(doc: Mapping[str, Any], term: str, fields: Iterable[str]) -> bool:
    """
    Case-insensitive substring match over the named fields.

    Example:
        >>> matches_search({"title": "Python Dev"}, "python", ["title"])
        True
    """
    needle = (term or "").strip().lower()
    if not needle:
        return True
    return any(needle in _as_text(doc.get(field)).lower() for field in fields)


def filter_search(docs: Sequence[Mapping[str, Any]], term: str, fields: Iterable[str]) -> List[Mapping[str, Any]]:
    fields = tuple(fields)
    return [doc for doc in docs if matches_search(doc, term, fields)]


def paginate(items: Sequence[Any], page: int = 1, page_size: int = 10) -> Tuple[List[Any], int]:
    """
    Slice one page out of items.

    Returns:
        (items on the page, total number of items)
    """
    page = max(page, 1)
    page_size = max(page_size, 1)
    offset = (page - 1) * page_size
    return list(items[offset:offset + page_size]), len(items)
