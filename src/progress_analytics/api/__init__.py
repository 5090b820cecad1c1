"""HTTP API for the progress analytics engine."""
