"""Choir member registry API."""
