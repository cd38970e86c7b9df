from datetime import datetime, timezone

# Sunday 2026-11-01, 13:00 in Berlin. The next day is a Monday.
NOW = datetime(2026, 11, 1, 12, 0, tzinfo=timezone.utc)
TENANT = "acme"
