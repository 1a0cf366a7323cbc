"""Plotting helpers (matplotlib + seaborn)."""
