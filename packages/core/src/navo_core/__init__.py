"""Shared schemas and curated datasets for Navo."""
