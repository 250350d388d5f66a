"""Prop Firm Risk Engine — risk sizing, ruin probability and path simulation."""

__version__ = "0.1.0"
