"""Configuration, exceptions and lifecycle."""
