from __future__ import annotations

from datetime import date, datetime

# Formats written by earlier browser builds of the till and by legacy exports.
_LEGACY_TIMESTAMP_FORMATS = (
    "%d/%m/%Y, %H:%M:%S",
    "%m/%d/%Y, %I:%M:%S %p",
    "%d/%m/%Y %H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
)

_DAY_FORMATS = (
    "%Y-%m-%d",
    "%a %b %d %Y",
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%B %d, %Y",
)


def local_now() -> datetime:
    return datetime.now().astimezone()


def day_key(moment: datetime) -> str:
    return moment.date().isoformat()


def format_timestamp(moment: datetime) -> str:
    return moment.isoformat(timespec="seconds")


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a stored timestamp into an aware local datetime.

    Returns None for empty or unrecognised values instead of raising.
    """
    if not value:
        return None
    text = value.strip()
    parsed: datetime | None = None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        for fmt in _LEGACY_TIMESTAMP_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    try:
        return parsed.astimezone()
    except (OverflowError, OSError):
        return None


def parse_day(value: str | None) -> date | None:
    if not value:
        return None
    text = value.strip()
    for fmt in _DAY_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    parsed = parse_timestamp(text)
    if parsed is None:
        return None
    return parsed.date()
