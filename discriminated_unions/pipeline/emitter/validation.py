"""
Validation of generated C# sources.
"""

from __future__ import annotations

from ..errors import EmissionError, SourceParseError
from ..syntax.csharp_parser import CSharpSourceParser


class CSharpValidator:
    """Checks that generated code is syntactically valid C#.

    Cheap structural checks run first; the source is then reparsed with
    tree-sitter.
    """

    def __init__(self):
        self._parser = CSharpSourceParser()

    def __call__(self, content: str, path: str = "") -> None:
        self.validate(content, path)

    def validate(self, content: str, path: str = "") -> None:
        """Validate generated C# code.

        Raises:
            EmissionError: If validation fails
        """
        if not any(keyword in content for keyword in ("class ", "struct ", "record ")):
            raise EmissionError(f"Generated C# code has no type definitions: {path or '<generated>'}")

        open_braces = content.count("{")
        close_braces = content.count("}")
        if open_braces != close_braces:
            raise EmissionError(f"Generated C# code has unbalanced braces: {open_braces} open, {close_braces} close")

        try:
            self._parser.parse_tree(content, path)
        except SourceParseError as e:
            raise EmissionError(f"Generated C# code is not valid: {e}") from e
