"""Adapters at the boundary with the extraction layer."""
