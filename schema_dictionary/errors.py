from __future__ import annotations

from typing import List, Optional


class SchemaDictionaryError(Exception):
    """
    Base exception for schema loading and extraction failures.

    Attributes:
        message: Human-readable error description
        context: Optional context about where the error occurred
    """

    def __init__(self, message: str, context: Optional[str] = None) -> None:
        self.message = message
        self.context = context
        full_message = message
        if context:
            full_message = f"{message} (context: {context})"
        super().__init__(full_message)


class SchemaParseError(SchemaDictionaryError):
    """Raised when an input document is not a JSON object."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        super().__init__(f"Could not parse {name}: {reason}", context=name)


class CyclicCompositionError(SchemaDictionaryError):
    """
    Raised when `allOf`/`$ref` composition loops back onto itself.

    Attributes:
        cycle_path: References followed, ending with the one that closed the loop
    """

    def __init__(self, cycle_path: List[str]) -> None:
        self.cycle_path = list(cycle_path)
        super().__init__(
            "Cyclic schema composition detected",
            context=" -> ".join(self.cycle_path),
        )
