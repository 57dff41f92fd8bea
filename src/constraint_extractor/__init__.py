"""Extract, group and cross-check constraints from free-form text via LLM providers."""

__version__ = "0.1.0"
