LIKE_ESCAPE = "\\"


def contains_pattern(search: str) -> str:
    """ILIKE pattern matching ``search`` literally anywhere; use with ``escape=LIKE_ESCAPE``."""
    escaped = search.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2).replace("%", r"\%").replace("_", r"\_")
    return f"%{escaped}%"
