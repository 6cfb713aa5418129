from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC timestamp, the format stored in every timestamp column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def clean_text(value) -> str:
    return (value or "").strip()
