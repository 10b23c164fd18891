"""CSV serialization for report and list exports.

Cell rules:
- strings containing a comma, a double quote or a newline are wrapped in
  double quotes, with inner double quotes doubled
- None is an empty field
- any other value uses its default text form

Fields are joined by "," and rows by "\\n", with no trailing newline and no
byte-order mark. csv.writer is not used because QUOTE_MINIMAL also quotes
on carriage returns and on a lone empty field.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any, Mapping, Sequence

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
_NEEDS_QUOTING = (",", '"', "\n")


def escape_csv_value(value: Any) -> str:
    """Render a single cell."""
    if value is None:
        return ""
    if isinstance(value, str):
        if any(ch in value for ch in _NEEDS_QUOTING):
            return '"' + value.replace('"', '""') + '"'
        return value
    return str(value)


def rows_to_csv(
    rows: Sequence[Mapping[str, Any]],
    headers: Mapping[str, str] | None = None,
) -> str | None:
    """Serialize rows to CSV text, or None when there are no rows.

    With headers, its keys select and order the columns and its values are
    the header labels. Without, the first row's keys are used for both.
    """
    if not rows:
        return None

    keys = list(headers.keys()) if headers else list(rows[0].keys())
    labels = list(headers.values()) if headers else keys

    lines = [",".join(escape_csv_value(label) for label in labels)]
    for row in rows:
        lines.append(",".join(escape_csv_value(row.get(key)) for key in keys))
    return "\n".join(lines)


def csv_filename(filename: str) -> str:
    """Download name for an export."""
    return f"{filename}.csv"


def export_rows(
    rows: Sequence[Mapping[str, Any]],
    filename: str,
    headers: Mapping[str, str] | None = None,
    output_dir: Path | str = ".",
) -> Path | None:
    """Write rows to <output_dir>/<filename>.csv.

    Returns the written path, or None without touching the filesystem when
    rows is empty.
    """
    content = rows_to_csv(rows, headers)
    if content is None:
        logger.info("Nothing to export for %s", filename)
        return None

    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / csv_filename(filename)
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(content)

    logger.info("Exported %d rows to %s", len(rows), path)
    return path


def format_date_for_csv(value: date | datetime | str) -> str:
    """Calendar date portion (YYYY-MM-DD) of a date or ISO-8601 timestamp.

    Timezone-aware timestamps are converted to UTC first.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    return value.isoformat()


def format_currency_for_csv(amount: Decimal | int | float) -> str:
    """Amount with exactly two fractional digits."""
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return str(amount.quantize(CENTS, rounding=ROUND_HALF_UP))
