"""Admin app routes."""
