"""Mini README: Gas cylinder inventory.

Exports ``GasLedger`` which applies swap and refill events against the
configured cylinder counts, plus the event and snapshot types it produces.
"""

from .ledger import GasEvent, GasEventType, GasLedger, GasState

__all__ = ["GasEvent", "GasEventType", "GasLedger", "GasState"]
