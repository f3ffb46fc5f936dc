"""Javadoc comment parsing."""

import re

from autodoc.parser.declarations import DocComment

_INLINE_TAG = re.compile(r"\{@(?:link|linkplain|code|literal|value)\s+([^}]*)\}")
_BLOCK_TAG = re.compile(r"^@(\w+)\s*(.*)$")


def is_javadoc(comment: str) -> bool:
    return comment.startswith("/**") and not comment.startswith("/**/")


def parse_javadoc(comment: str) -> DocComment:
    """Parse a ``/** ... */`` comment into description and block tags.

    The description is everything before the first block tag. Inline tags
    such as ``{@link User}`` are replaced by their text.
    """
    doc = DocComment()
    if not is_javadoc(comment):
        return doc

    body = comment[3:]
    if body.endswith("*/"):
        body = body[:-2]

    lines = []
    for line in body.splitlines():
        line = line.strip()
        if line.startswith("*"):
            line = line[1:]
            if line.startswith(" "):
                line = line[1:]
        lines.append(line.rstrip())

    description: list[str] = []
    blocks: list[tuple[str, list[str]]] = []
    for line in lines:
        match = _BLOCK_TAG.match(line)
        if match:
            blocks.append((match.group(1), [match.group(2)]))
        elif blocks:
            blocks[-1][1].append(line)
        else:
            description.append(line)

    doc.description = _clean("\n".join(description))
    for name, parts in blocks:
        text = _clean(" ".join(" ".join(parts).split()))
        if name == "param":
            param, _, param_text = text.partition(" ")
            if param:
                doc.params[param] = param_text.strip()
        elif name == "return":
            doc.returns = text
        elif name == "deprecated":
            doc.deprecated = text
        elif name == "since":
            doc.since = text
    return doc


def _clean(text: str) -> str:
    text = _INLINE_TAG.sub(lambda m: m.group(1).strip(), text)
    # collapse runs of blank lines left by stripped leading asterisks
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()
