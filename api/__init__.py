"""HTTP API routers for the ZONE services."""
