"""HTTP API for the reading UI."""
