from datetime import datetime, timezone
from email.utils import format_datetime


def tick(now: datetime | None = None) -> str:
    """Current time as an RFC 1123 UTC string, e.g. ``Mon, 12 Jan 2026 20:14:05 GMT``."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return format_datetime(now.astimezone(timezone.utc).replace(microsecond=0), usegmt=True)
