"""Shared models and enums."""
