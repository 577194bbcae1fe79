"""Mini README: Core package initializer for the daily P&L tracker.

The package turns a collection of daily sales and expense records into the
numbers a small shop owner looks at every morning: profit, cost ratios,
trends, a restocking watch list and the gas cylinder stock. Subpackages are
split by concern (``taxonomy``, ``records``, ``metrics``, ``gas``,
``storage``, ``finance`` and ``interface``); this module only re-exports the
logging helper so importing the package stays cheap.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
