"""Shared constants for Tripwire."""
