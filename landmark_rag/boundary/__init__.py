"""Boundary layer: persistence, vector stores, LLM capabilities and document sources."""
