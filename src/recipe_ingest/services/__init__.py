"""Service layer: upstream clients, downstream sinks and the extraction core."""
