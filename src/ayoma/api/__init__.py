"""HTTP API for Ayoma."""
