"""Recipe ingest service: turns shared recipe links into list entries."""

__version__ = "0.1.0"
