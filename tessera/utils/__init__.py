"""Encoding and validation helpers for Tessera."""
