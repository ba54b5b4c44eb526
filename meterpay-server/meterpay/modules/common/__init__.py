"""Shared abstractions used across domain modules."""
