from typing import Optional


def required_text(value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError("must not be empty")
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def optional_page_number(value: Optional[int]) -> Optional[int]:
    # 0 means "no page" in forms; store it as null
    if value is None or value == 0:
        return None
    if value < 0:
        raise ValueError("page number must be positive")
    return value
