"""Shared utilities: logging, YAML config, loss coercion."""
