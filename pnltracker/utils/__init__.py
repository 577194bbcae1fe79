"""Mini README: Utility helpers shared across the tracker.

Exports the list move primitive used by every reorder gesture and the money
formatting helpers used by the dashboard payloads and the CLI summary.
"""

from .formatting import format_compact, format_indian_number, format_signed_amount
from .ordering import move_element, step_target

__all__ = [
    "format_compact",
    "format_indian_number",
    "format_signed_amount",
    "move_element",
    "step_target",
]
