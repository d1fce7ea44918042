"""Registry for statement format handlers."""

from pathlib import Path
from typing import Dict, Optional, Type, Union

from .base import StatementFormat
from .text import TextFormat


class FormatRegistry:
    """Registry for managing statement format handlers."""

    def __init__(self):
        self._formats: Dict[str, Type[StatementFormat]] = {}
        self._register_default_formats()

    def _register_default_formats(self):
        """Register default format handlers."""
        self.register('text', TextFormat)

    def register(self, name: str, format_class: Type[StatementFormat]):
        """Register a new format handler."""
        self._formats[name.lower()] = format_class

    def list_formats(self):
        return list(self._formats.keys())

    def get_handler(self, format_name: str) -> StatementFormat:
        """Get a format handler by name."""
        name = format_name.lower()
        if name not in self._formats:
            raise ValueError(f"Unknown statement format: {format_name}")
        return self._formats[name]()

    def get_handler_for_file(self, file_path: Path) -> StatementFormat:
        """Get appropriate handler based on file extension."""
        for format_class in self._formats.values():
            handler = format_class()
            if file_path.suffix in handler.extensions:
                return handler

        raise ValueError(f"No handler found for file extension: {file_path.suffix}")


_registry = FormatRegistry()


def get_format_handler(format_name: Optional[str] = None,
                       file_path: Optional[Union[str, Path]] = None) -> StatementFormat:
    """Get a statement format handler."""
    if format_name:
        return _registry.get_handler(format_name)
    elif file_path:
        return _registry.get_handler_for_file(Path(file_path))
    else:
        raise ValueError("Either format_name or file_path must be provided")
