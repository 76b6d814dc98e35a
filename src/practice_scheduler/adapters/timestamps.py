"""Timestamp decoding shared by the Supabase adapters."""

from datetime import UTC, datetime


def parse_timestamp(raw: str) -> datetime:
    """Parse an ISO-8601 column value into an aware UTC datetime.

    Naive values are read as UTC.
    """
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)
