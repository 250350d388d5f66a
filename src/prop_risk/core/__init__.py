"""Shared models, enums, errors, logging and settings."""
