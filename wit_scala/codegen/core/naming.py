"""
Naming utilities for safe code generation.

Handles case conversion of hyphen-delimited WIT identifiers and
escaping of names that collide with target language reserved words.
"""

import re
from typing import Dict, List, Optional, Set, Tuple
from enum import Enum


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName
    KEBAB_CASE = "kebab"  # user-name
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME


# Used when a name contains no identifier characters at all
FALLBACK_NAME = "field"


class NameSanitizer:
    """Handles case conversion and keyword escaping."""

    def __init__(
        self,
        reserved_words: Optional[Set[str]] = None,
        escape_format: str = "{}_",
    ):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of names that must be escaped when produced verbatim
            escape_format: Format string applied to a reserved name (e.g. "`{}`")
        """
        self.reserved_words = reserved_words or set()
        self.escape_format = escape_format
        self._name_cache: Dict[Tuple[str, NamingCase], str] = {}

    def sanitize_name(
        self, name: str, target_case: NamingCase = NamingCase.SNAKE_CASE
    ) -> str:
        """
        Convert a name to the target case, escaping it if required.

        Only camelCase and PascalCase results are escaped; the other cases
        are used for package segments and file names.

        Args:
            name: Original (usually kebab-case) name
            target_case: Desired case style

        Returns:
            Converted name safe for use as an identifier
        """
        cache_key = (name, target_case)
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        converted = self._convert_case(name, target_case)
        if target_case in (NamingCase.CAMEL_CASE, NamingCase.PASCAL_CASE):
            converted = self.escape_keyword(converted)

        self._name_cache[cache_key] = converted
        return converted

    def to_camel_case(self, name: str) -> str:
        """Convert to camelCase (methods, parameters, fields)."""
        return self.sanitize_name(name, NamingCase.CAMEL_CASE)

    def to_pascal_case(self, name: str) -> str:
        """Convert to PascalCase (types, cases)."""
        return self.sanitize_name(name, NamingCase.PASCAL_CASE)

    def to_snake_case(self, name: str) -> str:
        """Convert to snake_case (package segments, file names)."""
        return self.sanitize_name(name, NamingCase.SNAKE_CASE)

    def needs_escaping(self, name: str) -> bool:
        """Check whether a name exactly matches a reserved word."""
        return name in self.reserved_words

    def escape_keyword(self, name: str) -> str:
        """Escape a name if it is reserved, otherwise return it unchanged."""
        if self.needs_escaping(name):
            return self.escape_format.format(name)
        return name

    def _split_words(self, name: str) -> List[str]:
        """Split a name into words on separators and case humps."""
        # HTTPServer -> HTTP_Server, userName -> user_Name
        name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
        name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
        return [part for part in re.split(r"[^a-zA-Z0-9]+", name) if part]

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        if not name:
            return ""

        words = self._split_words(name)
        if not words:
            words = [FALLBACK_NAME]

        if target_case == NamingCase.SNAKE_CASE:
            return "_".join(word.lower() for word in words)
        elif target_case == NamingCase.CAMEL_CASE:
            return words[0].lower() + "".join(word.capitalize() for word in words[1:])
        elif target_case == NamingCase.PASCAL_CASE:
            return "".join(word.capitalize() for word in words)
        elif target_case == NamingCase.KEBAB_CASE:
            return "-".join(word.lower() for word in words)
        elif target_case == NamingCase.SCREAMING_SNAKE:
            return "_".join(word.upper() for word in words)
        else:
            raise ValueError(f"Unsupported naming case: {target_case}")
