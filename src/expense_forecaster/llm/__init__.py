"""LLM narrative module."""
from .insight_generator import InsightGenerator, InsightSchema, build_prompt, describe_changes

__all__ = ["InsightGenerator", "InsightSchema", "build_prompt", "describe_changes"]
