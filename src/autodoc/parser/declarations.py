"""Declaration records handed over by a source tree builder.

These are the only shapes the extractors look at. A tree builder adapter
(see ``autodoc.parser.java``) converts its own nodes into them once, so the
extraction layer never touches builder-specific node types.

Tag attribute values are kept as raw source text (``"\\"/users\\""``,
``RequestMethod.POST``, ``{"a", "b"}``); the ``get_*`` helpers interpret them.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

WILDCARD = "?"

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "'": "'", "\\": "\\"}


class DeclarationKind(Enum):
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    RECORD = "record"
    ANNOTATION = "annotation"


@dataclass(frozen=True)
class TypeNode:
    """A type as written in source: base name, generic arguments, array flag.

    Arrays keep their element type in ``args[0]``; wildcards are named ``?``.
    """

    name: str
    args: tuple["TypeNode", ...] = ()
    is_array: bool = False

    @classmethod
    def array_of(cls, element: "TypeNode") -> "TypeNode":
        return cls(name=element.name, args=(element,), is_array=True)


@dataclass(frozen=True)
class Tag:
    """A metadata tag (annotation) with its key/value attributes."""

    name: str
    attributes: dict[str, str] = field(default_factory=dict)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.attributes.get(key, default)

    def get_string(self, *keys: str) -> str | None:
        """First present key, unquoted; arrays yield their first element."""
        for key in keys:
            if key in self.attributes:
                values = split_array(self.attributes[key])
                return unquote(values[0]) if values else ""
        return None

    def get_strings(self, *keys: str) -> list[str]:
        for key in keys:
            if key in self.attributes:
                return [unquote(v) for v in split_array(self.attributes[key])]
        return []

    def get_bool(self, key: str) -> bool | None:
        raw = self.attributes.get(key)
        if raw is None:
            return None
        value = raw.strip().lower()
        if value == "true":
            return True
        if value == "false":
            return False
        return None


@dataclass
class DocComment:
    """Free-text documentation attached to a declaration."""

    description: str = ""
    params: dict[str, str] = field(default_factory=dict)
    returns: str = ""
    deprecated: str | None = None
    since: str = ""

    @property
    def summary(self) -> str:
        """First sentence of the description."""
        first_paragraph = self.description.split("\n\n", 1)[0]
        text = " ".join(first_paragraph.split())
        match = re.match(r"(.+?\.)(\s|$)", text)
        return match.group(1) if match else text


@dataclass
class ParameterDecl:
    name: str
    type: TypeNode
    tags: list[Tag] = field(default_factory=list)


@dataclass
class FieldDecl:
    name: str
    type: TypeNode
    tags: list[Tag] = field(default_factory=list)
    doc: DocComment = field(default_factory=DocComment)
    modifiers: frozenset[str] = frozenset()

    @property
    def is_static(self) -> bool:
        return "static" in self.modifiers

    @property
    def is_final(self) -> bool:
        return "final" in self.modifiers


@dataclass
class MethodDecl:
    name: str
    return_type: TypeNode
    parameters: list[ParameterDecl] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    doc: DocComment = field(default_factory=DocComment)
    modifiers: frozenset[str] = frozenset()


@dataclass
class ConstructorDecl:
    parameters: list[ParameterDecl] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    doc: DocComment = field(default_factory=DocComment)


@dataclass
class EnumConstantDecl:
    name: str
    doc: DocComment = field(default_factory=DocComment)
    tags: list[Tag] = field(default_factory=list)


@dataclass
class TypeDecl:
    """A class, interface, enumeration, record or annotation type."""

    name: str
    namespace: str = ""
    kind: DeclarationKind = DeclarationKind.CLASS
    tags: list[Tag] = field(default_factory=list)
    doc: DocComment = field(default_factory=DocComment)
    modifiers: frozenset[str] = frozenset()
    superclass: TypeNode | None = None
    interfaces: list[TypeNode] = field(default_factory=list)
    fields: list[FieldDecl] = field(default_factory=list)
    constructors: list[ConstructorDecl] = field(default_factory=list)
    methods: list[MethodDecl] = field(default_factory=list)
    enum_constants: list[EnumConstantDecl] = field(default_factory=list)
    origin: str = ""

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    @property
    def is_abstract(self) -> bool:
        return "abstract" in self.modifiers


def has_tag(tags: list[Tag], *names: str) -> bool:
    return any(t.name in names for t in tags)


def find_tag(tags: list[Tag], *names: str) -> Tag | None:
    """First tag (in declaration order) whose name is one of ``names``."""
    for tag in tags:
        if tag.name in names:
            return tag
    return None


def unquote(raw: str) -> str:
    """Strip surrounding double quotes from a literal and undo its escapes."""
    text = raw.strip()
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(0)), text[1:-1])
    return text


def split_array(raw: str) -> list[str]:
    """Split an array initializer ``{a, "b,c"}`` into elements.

    A value that is not an array initializer is a single element.
    """
    text = raw.strip()
    if not (text.startswith("{") and text.endswith("}")):
        return [text]

    elements = []
    current = []
    in_string = False
    escaped = False
    for ch in text[1:-1]:
        if in_string:
            current.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
            current.append(ch)
        elif ch == ",":
            elements.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    last = "".join(current).strip()
    if last:
        elements.append(last)
    return [e for e in elements if e]
