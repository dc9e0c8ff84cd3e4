"""Path search, provider delegation and incident recalculation."""
