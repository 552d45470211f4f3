"""Superface hub integration."""

from .client import SuperfaceHubClient

__all__ = ["SuperfaceHubClient"]
