"""Adapters binding domain ports to HTTP, files and logging."""
