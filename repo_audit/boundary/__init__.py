"""Boundary adapters for external services (repository providers, LLM backend)."""
