"""
Output formatters for uxpro tool responses.
"""

from .tool_formatter import ToolOutputFormatter

__all__ = ["ToolOutputFormatter"]
