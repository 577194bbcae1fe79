"""Mini README: Interfaces (HTTP/CLI) for the P&L tracker.

Exports the FastAPI application factory. The Typer CLI lives in
``main_dashboard.py`` at the repository root and reuses ``build_ledger``.
"""

from .web_app import build_ledger, create_application

__all__ = ["build_ledger", "create_application"]
