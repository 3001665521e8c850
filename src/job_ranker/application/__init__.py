"""Application use cases around the scoring engine."""
