"""Utility constants for datecalc."""

from datetime import datetime, timezone

DAYS_PER_WEEK = 7

# Unix timestamps count seconds from here
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Largest years/months/days offset the calculator accepts
MAX_OFFSET = 999
