"""Errors raised for programmer mistakes in the proof exploration engine.

Soft failures (a pattern that is not found, a theorem that does not apply)
are never raised: they are recorded in the justification of the resulting
proof state. Everything in this module signals a bug in the caller.
"""


class ProofEngineError(Exception):
    """Base class for unrecoverable proof engine errors."""


class UnknownNodeError(ProofEngineError, KeyError):
    """A node id that does not exist in the forest was referenced."""

    def __init__(self, node_id):
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self):
        return f"No proof node with id {self.node_id}"


class EmptyForestError(ProofEngineError):
    """A branch was requested from a forest that has no root node."""


class UnknownBookmarkError(ProofEngineError, KeyError):
    """A bookmark name that was never registered was dereferenced."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"No bookmark named '{self.name}'"


class InvalidPositionError(ProofEngineError, IndexError):
    """A position path does not address a subterm of the given term."""

    def __init__(self, position, term=None):
        super().__init__(position)
        self.position = tuple(position)
        self.term = term

    def __str__(self):
        if self.term is None:
            return f"Invalid position {list(self.position)}"
        return f"Invalid position {list(self.position)} in {self.term}"
