"""Vector store adapters and their supporting utilities."""
