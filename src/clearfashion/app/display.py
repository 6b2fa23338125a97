"""Text and JSON rendering of a query result for CLI output."""

import json

import pandas as pd

from ..config.rules import NEW_RELEASE_WINDOW_DAYS
from ..models import Page, Statistics

TABLE_COLUMNS = ["brand", "name", "price", "released", "link"]
NAME_WIDTH = 48


def page_frame(page: Page) -> pd.DataFrame:
    rows = [p.to_dict() for p in page.items]
    df = pd.DataFrame(rows, columns=TABLE_COLUMNS)
    df["name"] = df["name"].str.slice(0, NAME_WIDTH)
    return df


def format_statistics(stats: Statistics) -> str:
    data = stats.to_dict()
    lines = [
        f"Products: {data['matchedCount']} matched / {data['totalCount']} total",
        f"Brands: {data['brandCount']}",
        f"New (last {NEW_RELEASE_WINDOW_DAYS} days): {data['newCount']}",
        f"Price p50 / p90 / p95: {data['p50']} / {data['p90']} / {data['p95']}",
        f"Last released: {data['lastReleasedDate']}",
    ]
    return "\n".join(lines)


def format_page(page: Page, stats: Statistics) -> str:
    out = ["=" * 60, f"Page {page.current_page}/{page.page_count} ({page.count} products)", "=" * 60]
    if page.items:
        out.append(page_frame(page).to_string(index=False))
    else:
        out.append("No products.")
    out.append("-" * 60)
    out.append(format_statistics(stats))
    return "\n".join(out)


def to_json(page: Page, stats: Statistics) -> str:
    """Same envelope as the catalog API: ``{"success": true, "data": {...}}``."""
    data = page.to_dict()
    data["stats"] = stats.to_dict()
    return json.dumps({"success": True, "data": data}, ensure_ascii=False, indent=2)
