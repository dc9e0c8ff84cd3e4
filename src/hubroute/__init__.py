"""Hub-to-hub delivery routing with incident-aware recalculation."""

__version__ = "0.1.0"
