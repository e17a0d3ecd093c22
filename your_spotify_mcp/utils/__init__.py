"""Shared utilities: errors, logging, rate limiting, fan-out and identifiers."""
