"""Shared schemas."""

from stratsim.schemas.presentation import Insights, format_money_millions

__all__ = ["Insights", "format_money_millions"]
