"""HTTP API for Retouch."""
