from typing import Tuple
from framework.exceptions.handler import ValidationError


def page_window(page: int, limit: int) -> Tuple[int, int]:
    """Validate 1-based page/limit and return (limit, offset)."""
    if page < 1 or limit < 1:
        raise ValidationError("Page and limit must be positive")
    return limit, (page - 1) * limit
