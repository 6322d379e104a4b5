"""Shared building blocks: logging, monitoring, persistence and data models."""
