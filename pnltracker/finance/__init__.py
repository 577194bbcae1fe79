"""Mini README: Daily ledger service.

Groups the service object that the HTTP interface and CLI share: it owns
the loaded records, the expense structure and the gas ledger, and it is
the only place that talks to the storage collaborator.
"""

from .ledger import DailyLedger

__all__ = ["DailyLedger"]
