"""Small shared utilities."""

from fontlet.utils.logging import get_logger

__all__ = ["get_logger"]
