from typing import Any, List, Mapping, Optional

from ..config.rules import PRICE_MAX
from .normalize import (
    LINK_KEYS,
    canonicalize_link,
    collapse_whitespace,
    first_present,
    is_missing,
    parse_price_number,
    parse_released,
)


def validate_raw_record(raw: Any, base_url: Optional[str] = None) -> List[str]:
    if not isinstance(raw, Mapping):
        return ["not_a_record"]

    problems = []

    link = first_present(raw, LINK_KEYS)
    if link is None:
        problems.append("missing_link")
    elif canonicalize_link(link, base_url) is None:
        problems.append("invalid_link")

    if not collapse_whitespace(raw.get("name")):
        problems.append("missing_name")

    price = raw.get("price")
    if is_missing(price):
        problems.append("missing_price")
    else:
        value = parse_price_number(price)
        if value is None:
            problems.append("price_not_numeric")
        elif value < 0:
            problems.append("price_negative")
        elif value > PRICE_MAX:
            problems.append("price_out_of_range")

    try:
        parse_released(raw.get("released"))
    except (TypeError, ValueError):
        problems.append("released_invalid")

    return problems
