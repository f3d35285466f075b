"""Interfaces the API layer depends on."""
