"""Pairing algorithms."""
