"""Upcoming-events planner package."""

from src.planner.aggregator import build_plan, normalize_include, parse_include

__all__ = ["build_plan", "normalize_include", "parse_include"]
