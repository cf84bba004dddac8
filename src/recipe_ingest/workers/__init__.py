"""Background job processing with arq."""
