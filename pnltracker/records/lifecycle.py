"""Mini README: Record status state machine.

Structure:
    * RecordStatus - IN_PROGRESS / COMPLETED / CLOSED.
    * encode_status / decode_status - mapping to the persisted flag pair.
    * apply_status - set a record's flags from a chosen status.
    * validate_for_save / finalise_for_save - gate a record before storage.

All three states are reachable from one another; transitions only happen
when the user picks a status. A closed day always counts as completed.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional, Tuple

from ..errors import ValidationError
from ..logging_utils import get_logger
from .models import DailyRecord

LOGGER = get_logger(__name__)


class RecordStatus(str, Enum):
    """Completion state of a daily record."""

    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CLOSED = "CLOSED"

    @classmethod
    def from_str(cls, value: str) -> "RecordStatus":
        """Coerce arbitrary casing and separators into a valid status."""

        try:
            normalised = value.strip().upper().replace("-", "_").replace(" ", "_")
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported record status: {value}") from error


def encode_status(status: RecordStatus) -> Tuple[bool, bool]:
    """Return ``(is_closed, is_completed)`` for a status."""

    return (
        status is RecordStatus.CLOSED,
        status in (RecordStatus.COMPLETED, RecordStatus.CLOSED),
    )


def decode_status(is_closed: bool, is_completed: Optional[bool]) -> RecordStatus:
    """Map stored flags back to a status.

    ``is_completed`` of ``None`` marks a legacy record and decodes as
    COMPLETED; only an explicit ``False`` means IN_PROGRESS.
    """

    if is_closed:
        return RecordStatus.CLOSED
    if is_completed is None or is_completed:
        return RecordStatus.COMPLETED
    return RecordStatus.IN_PROGRESS


def decode_payload_status(payload: Mapping[str, object]) -> RecordStatus:
    """Status of a raw stored record dictionary."""

    raw_completed = payload.get("isCompleted")
    return decode_status(
        bool(payload.get("isClosed", False)),
        None if raw_completed is None else bool(raw_completed),
    )


def record_status(record: DailyRecord) -> RecordStatus:
    return decode_status(record.is_closed, record.is_completed)


def apply_status(record: DailyRecord, status: RecordStatus) -> DailyRecord:
    """Set the record's flags for ``status`` in place and return it."""

    record.is_closed, record.is_completed = encode_status(status)
    LOGGER.debug("Record %s set to %s", record.record_id, status.value)
    return record


def validate_for_save(record: DailyRecord, status: Optional[RecordStatus] = None) -> RecordStatus:
    """Raise ``ValidationError`` when the record may not be stored as ``status``."""

    status = status or record_status(record)
    if record.record_date is None:
        raise ValidationError("Date required")
    if status is RecordStatus.COMPLETED and record.total_sales is None:
        raise ValidationError("Total Sales required")
    return status


def finalise_for_save(record: DailyRecord, status: Optional[RecordStatus] = None) -> DailyRecord:
    """Validate and return a storage-ready copy of ``record``.

    Closed days persist zero sales because sales inputs are ignored; sales
    left blank on an in-progress day persist as zero. The input record is
    never modified, so a failed save leaves the form untouched.
    """

    status = validate_for_save(record, status)
    prepared = apply_status(record.clone(), status)
    if status is RecordStatus.CLOSED:
        prepared.morning_sales = 0.0
        prepared.total_sales = 0.0
    else:
        prepared.morning_sales = prepared.morning_sales or 0.0
        prepared.total_sales = prepared.total_sales or 0.0
    return prepared
