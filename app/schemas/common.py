# app/schemas/common.py
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from app.utils.timeutils import as_utc

# Datetime that is always timezone-aware UTC, whatever the driver returned
UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]
