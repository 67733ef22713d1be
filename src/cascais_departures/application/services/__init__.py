"""Application services (use cases) for departure reconciliation."""

from cascais_departures.application.services.reconciliation_engine import ReconciliationEngine

__all__ = ["ReconciliationEngine"]
