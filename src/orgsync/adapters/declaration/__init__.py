"""Public interface for the declaration adapter."""

from __future__ import annotations

from .accessor import ConfigAccessor
from .loader import parse_declaration, read_declaration_file

__all__ = ["ConfigAccessor", "parse_declaration", "read_declaration_file"]
