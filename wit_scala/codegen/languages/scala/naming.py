"""
Scala-specific naming utilities and sanitization.

Handles Scala reserved words and backtick escaping.
"""

from ...core.naming import NameSanitizer


# Scala 2 keywords
SCALA_RESERVED_WORDS = {
    "abstract",
    "case",
    "catch",
    "class",
    "def",
    "do",
    "else",
    "extends",
    "false",
    "final",
    "finally",
    "for",
    "forSome",
    "if",
    "implicit",
    "import",
    "lazy",
    "match",
    "new",
    "null",
    "object",
    "override",
    "package",
    "private",
    "protected",
    "return",
    "sealed",
    "super",
    "this",
    "throw",
    "trait",
    "true",
    "try",
    "type",
    "val",
    "var",
    "while",
    "with",
    "yield",
    # Scala 3
    "enum",
    "export",
    "given",
    "then",
}

SCALA_SOFT_KEYWORDS = {
    "as",
    "derives",
    "end",
    "extension",
    "infix",
    "inline",
    "opaque",
    "open",
    "transparent",
    "using",
}

SCALA_RESERVED_SYMBOLS = {
    "_",
    ":",
    "=",
    "=>",
    "<-",
    "<:",
    "<%",
    ">:",
    "#",
    "@",
}

# java.lang.Object members a generated method must not shadow
SCALA_OBJECT_METHODS = {
    "equals",
    "hashCode",
    "toString",
    "wait",
    "notify",
    "notifyAll",
    "clone",
    "finalize",
    "getClass",
}

SCALA_KEYWORDS = (
    SCALA_RESERVED_WORDS
    | SCALA_SOFT_KEYWORDS
    | SCALA_RESERVED_SYMBOLS
    | SCALA_OBJECT_METHODS
)


def create_scala_sanitizer() -> NameSanitizer:
    """Create a name sanitizer that escapes Scala keywords with backticks."""
    return NameSanitizer(SCALA_KEYWORDS, escape_format="`{}`")
