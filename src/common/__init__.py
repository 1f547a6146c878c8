"""Shared helpers: errors, HTTP transport and logging."""
