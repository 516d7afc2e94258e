from typing import Iterable, List, Optional


def split_list(raw: Optional[str]) -> List[str]:
    """Comma-separated input to a list of trimmed, non-empty entries."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def initials(name: str) -> str:
    return "".join(part[0] for part in name.split() if part).upper()[:2]


def surname(name: str) -> str:
    parts = name.split()
    return parts[-1] if parts else name


def matches(term: str, *fields: Optional[str], extra: Iterable[str] = ()) -> bool:
    """Case-insensitive substring match against any of the given fields."""
    needle = term.lower()
    if not needle:
        return True
    haystack = [f for f in fields if f] + list(extra)
    return any(needle in value.lower() for value in haystack)
