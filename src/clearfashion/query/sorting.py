import pandas as pd

from ..config.rules import SORT_COLUMNS
from ..utils.logging import get_logger

logger = get_logger(__name__)


def sort_frame(frame: pd.DataFrame, sort_name: str) -> pd.DataFrame:
    """Stable sort by a named comparator; ties keep catalog order.

    ``released`` is a datetime column, so date sorts compare calendar dates.
    Empty or unknown names leave the frame as is.
    """
    key = SORT_COLUMNS.get(sort_name)
    if key is None:
        if sort_name:
            logger.warning("Unknown sort '%s' ignored", sort_name)
        return frame

    column, ascending = key
    return frame.sort_values(
        by=[column, "position"],
        ascending=[ascending, True],
        kind="stable",
    )
