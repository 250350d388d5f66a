"""Persistence and display collaborators that consume the engine's records."""
