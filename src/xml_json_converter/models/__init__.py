"""Data models for the XML/JSON converter."""

from .node import Node, format_value

__all__ = ["Node", "format_value"]
