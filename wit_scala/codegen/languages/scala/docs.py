"""
Scaladoc formatting for WIT documentation strings.
"""

from typing import Optional


def format_docs(docs: Optional[str], indent: int = 0) -> str:
    """
    Format documentation as a Scaladoc block.

    The first line opens the block, later lines get a continuation marker
    and blank lines become a bare marker, so the line structure of the
    input is kept exactly.

    Args:
        docs: Documentation text, may be None
        indent: Number of spaces to prefix every line with

    Returns:
        Scaladoc block ending in a newline, or "" when there are no docs
    """
    content = (docs or "").strip()
    if not content:
        return ""

    pad = " " * indent
    lines = content.splitlines()

    output = [f"{pad}/** {lines[0]}"]
    for line in lines[1:]:
        if line.strip():
            output.append(f"{pad} *  {line}")
        else:
            output.append(f"{pad} *")
    output.append(f"{pad} */")

    return "\n".join(output) + "\n"
