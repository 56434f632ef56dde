from datetime import datetime, timezone


def utcnow() -> datetime:
     """Naive UTC timestamp, matching the DateTime columns."""
     return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
     """Normalize client-supplied datetimes before storing them."""
     if value.tzinfo is None:
          return value
     return value.astimezone(timezone.utc).replace(tzinfo=None)
