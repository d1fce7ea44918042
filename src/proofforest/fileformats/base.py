"""Base class for statement format handlers."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from proofforest.core.logic import Expression, Relation, Term


class StatementFormat(ABC):
    """Abstract base class for statement format handlers.

    Statement format handlers are responsible for:
    1. Parsing statements and expressions written in a concrete syntax
    2. Formatting terms back into that syntax
    """

    def parse_file(self, file_path: Path) -> Relation:
        """Parse a file holding a single statement.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file content is invalid
        """
        with open(file_path, 'r', encoding='utf-8') as f:
            return self.parse_string(f.read())

    def write_file(self, term: Term, file_path: Path) -> None:
        """Write a term to a file."""
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(self.format_term(term) + "\n")

    @abstractmethod
    def parse_string(self, content: str) -> Relation:
        """Parse a statement.

        Args:
            content: String content to parse

        Returns:
            The parsed relation

        Raises:
            ValueError: If content is invalid
        """
        pass

    @abstractmethod
    def parse_expression(self, content: str) -> Expression:
        """Parse a single expression.

        Raises:
            ValueError: If content is invalid
        """
        pass

    @abstractmethod
    def format_term(self, term: Term) -> str:
        """Format a term as a string in this syntax."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this format."""
        pass

    @property
    @abstractmethod
    def extensions(self) -> List[str]:
        """Return list of file extensions this format handles."""
        pass
