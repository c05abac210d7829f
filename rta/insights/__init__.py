"""Insight extraction from customer reviews."""

from rta.insights.extractor import extract_insights

__all__ = ["extract_insights"]
