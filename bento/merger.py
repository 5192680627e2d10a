SEPARATOR = ", "


def merge(existing: str, extracted: str) -> str:
    """Append `extracted` to a field. Fields are opaque text, nothing is deduplicated."""
    if not existing:
        return extracted
    return f"{existing}{SEPARATOR}{extracted}"
