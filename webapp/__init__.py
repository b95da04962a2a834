"""HTTP API for the issue feed."""
