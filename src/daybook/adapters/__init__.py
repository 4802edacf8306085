"""Adapters binding domain ports to concrete storage."""
