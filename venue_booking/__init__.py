"""Venue booking API: cache-fronted booking lifecycle and slot availability."""

__version__ = "1.0.0"
