"""Mini README: Daily record model, factory and lifecycle.

``models`` defines the record tree and its persisted shape, ``factory``
creates records from the taxonomy and applies form edits, and
``lifecycle`` holds the three-state status machine and save validation.
"""

from .factory import (
    add_custom_item_to_record,
    apply_amount_edit,
    apply_photo_edit,
    apply_sales_edit,
    instantiate_from_structure,
    new_record,
    parse_amount,
)
from .lifecycle import (
    RecordStatus,
    apply_status,
    decode_payload_status,
    decode_status,
    encode_status,
    finalise_for_save,
    record_status,
    validate_for_save,
)
from .models import DailyRecord, ExpenseCategory, ExpenseItem, coerce_amount, parse_date

__all__ = [
    "DailyRecord",
    "ExpenseCategory",
    "ExpenseItem",
    "RecordStatus",
    "add_custom_item_to_record",
    "apply_amount_edit",
    "apply_photo_edit",
    "apply_sales_edit",
    "apply_status",
    "coerce_amount",
    "decode_payload_status",
    "decode_status",
    "encode_status",
    "finalise_for_save",
    "instantiate_from_structure",
    "new_record",
    "parse_amount",
    "parse_date",
    "record_status",
    "validate_for_save",
]
