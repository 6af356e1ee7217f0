"""Navo flight search API."""
