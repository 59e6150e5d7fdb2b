"""Shared building blocks: errors, logging and constants."""
