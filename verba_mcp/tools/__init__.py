"""MCP tool handlers."""

from .translation_tools import TranslationTools

__all__ = ['TranslationTools']
