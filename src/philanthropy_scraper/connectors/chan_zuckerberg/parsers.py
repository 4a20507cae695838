"""Parsers for the Chan Zuckerberg Initiative grants table HTML."""

import re
from typing import Optional

from bs4 import BeautifulSoup, Tag

from philanthropy_scraper.models.raw import RawContribution

from .constants import COL_AMOUNT_AND_YEARS, COL_DESCRIPTION, COL_GRANTEE, COL_TOPICS

COLUMN_CLASS = re.compile(r"^list-(\d+)$")


def clean_cell_text(element: Tag) -> str:
    """Visible text of an element with whitespace collapsed."""
    return " ".join(element.get_text(" ").split())


def _column_index(element: Tag) -> Optional[int]:
    for css_class in element.get("class") or []:
        m = COLUMN_CLASS.match(css_class)
        if m:
            return int(m.group(1))
    return None


def parse_row_cells(row: Tag) -> dict[int, list[str]]:
    """Map list-N column index -> searchable values in that column."""
    cells: dict[int, list[str]] = {}
    for cell in row.find_all(class_=COLUMN_CLASS):
        col = _column_index(cell)
        values = [clean_cell_text(v) for v in cell.select(".td-searchable")]
        values = [v for v in values if v]
        if values:
            cells.setdefault(col, []).extend(values)
    return cells


def _first(values: list[str]) -> Optional[str]:
    return values[0] if values else None


def raw_from_row(cells: dict[int, list[str]], page_url: str) -> RawContribution:
    """
    Build a RawContribution from one table row.
    The amount column holds the display amount then the year range; both are
    left as displayed for the source's parse rules.
    """
    amount_and_years = cells.get(COL_AMOUNT_AND_YEARS, [])
    topics = cells.get(COL_TOPICS, [])
    return RawContribution(
        title=_first(cells.get(COL_GRANTEE, [])),
        description=_first(cells.get(COL_DESCRIPTION, [])),
        amount=amount_and_years[0] if len(amount_and_years) > 0 else None,
        date=amount_and_years[1] if len(amount_and_years) > 1 else None,
        topics=topics or None,
        url=page_url,
    )


def parse_grants_table(page_html: str, page_url: str, limit: Optional[int] = None) -> list[RawContribution]:
    """Parse grant rows in page order; header and layout rows are skipped."""
    soup = BeautifulSoup(page_html, "html.parser")
    raw_list: list[RawContribution] = []
    for row in soup.select("tr"):
        cells = parse_row_cells(row)
        if not cells.get(COL_GRANTEE):
            continue
        raw_list.append(raw_from_row(cells, page_url))
        if limit is not None and len(raw_list) >= limit:
            break
    return raw_list
