"""Custom exception hierarchy for the Prop Firm Risk Engine."""

from __future__ import annotations


class PropRiskError(Exception):
    """Base exception for all prop_risk errors."""


class ConfigurationError(PropRiskError):
    """Invalid or missing configuration."""


class InvalidAccountConfigError(ConfigurationError):
    """Account configuration outside the domain the engine is meaningful for."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("Invalid account configuration: " + "; ".join(self.problems))
