"""Bundled phrasebook data."""
