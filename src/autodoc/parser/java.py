"""Java source adapter built on tree-sitter.

Turns tree-sitter-java syntax trees into the declaration records of
``autodoc.parser.declarations``. This is the only module that knows about
tree-sitter node types.
"""

import logging
from pathlib import Path

import tree_sitter_java
from tree_sitter import Language, Node, Parser

from autodoc.errors import SourceParseError
from autodoc.parser.declarations import (
    WILDCARD,
    ConstructorDecl,
    DeclarationKind,
    DocComment,
    EnumConstantDecl,
    FieldDecl,
    MethodDecl,
    ParameterDecl,
    Tag,
    TypeDecl,
    TypeNode,
)
from autodoc.parser.javadoc import is_javadoc, parse_javadoc

logger = logging.getLogger(__name__)

JAVA_LANGUAGE = Language(tree_sitter_java.language())

TYPE_DECLARATIONS = {
    "class_declaration": DeclarationKind.CLASS,
    "interface_declaration": DeclarationKind.INTERFACE,
    "enum_declaration": DeclarationKind.ENUM,
    "record_declaration": DeclarationKind.RECORD,
    "annotation_type_declaration": DeclarationKind.ANNOTATION,
}

_COMMENTS = {"block_comment", "line_comment", "comment"}
_ANNOTATIONS = {"annotation", "marker_annotation"}
_NOT_TYPES = _COMMENTS | _ANNOTATIONS | {"modifiers", "variable_declarator", "identifier"}


def iter_java_files(root: Path) -> list[Path]:
    """All ``*.java`` files below ``root``, in sorted order."""
    return sorted(p for p in root.rglob("*.java") if p.is_file())


class JavaSourceParser:
    """Parses Java compilation units into type declarations."""

    def __init__(self):
        self._parser = Parser(JAVA_LANGUAGE)

    def parse_source(self, source: str | bytes, origin: str = "<string>") -> list[TypeDecl]:
        """Parse one compilation unit. Nested member types are returned flat."""
        data = source.encode("utf-8") if isinstance(source, str) else source
        tree = self._parser.parse(data)
        root = tree.root_node
        if root.has_error:
            logger.warning("%s: syntax errors found, using the partial tree", origin)

        decls: list[TypeDecl] = []
        _collect_types(root.named_children, _package_name(root), origin, decls)
        return decls

    def parse_file(self, path: Path) -> list[TypeDecl]:
        try:
            data = path.read_bytes()
            data.decode("utf-8")
        except OSError as e:
            raise SourceParseError(str(path), e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise SourceParseError(str(path), f"not valid UTF-8 ({e.reason})") from e
        return self.parse_source(data, origin=str(path))

    def parse_paths(self, paths: list[Path]) -> list[TypeDecl]:
        """Parse files and directories (searched recursively) in the given order."""
        decls: list[TypeDecl] = []
        file_count = 0
        for path in paths:
            files = iter_java_files(path) if path.is_dir() else [path]
            for file_path in files:
                decls.extend(self.parse_file(file_path))
                file_count += 1
        logger.info("Parsed %d files, %d type declarations", file_count, len(decls))
        return decls


# -- declarations -------------------------------------------------------------


def _collect_types(nodes: list[Node], namespace: str, origin: str, out: list[TypeDecl]) -> None:
    for node in nodes:
        kind = TYPE_DECLARATIONS.get(node.type)
        if kind is None:
            continue
        decl = _type_decl(node, kind, namespace, origin)
        out.append(decl)
        nested_namespace = f"{namespace}.{decl.name}" if namespace else decl.name
        _collect_types(_body_members(node), nested_namespace, origin, out)


def _type_decl(node: Node, kind: DeclarationKind, namespace: str, origin: str) -> TypeDecl:
    tags, modifiers = _modifiers(node)
    decl = TypeDecl(
        name=_text(node.child_by_field_name("name")),
        namespace=namespace,
        kind=kind,
        tags=tags,
        doc=_doc_for(node),
        modifiers=modifiers,
        origin=origin,
    )

    for child in node.named_children:
        if child.type == "superclass":
            types = _type_children(child)
            decl.superclass = _type_node(types[0]) if types else None
        elif child.type in ("super_interfaces", "extends_interfaces"):
            for type_list in child.named_children:
                if type_list.type == "type_list":
                    decl.interfaces.extend(_type_node(t) for t in _type_children(type_list))

    if kind is DeclarationKind.RECORD:
        components = node.child_by_field_name("parameters")
        if components is not None:
            for param in _parameters(components):
                decl.fields.append(FieldDecl(name=param.name, type=param.type, tags=param.tags))

    for member in _body_members(node):
        if member.type in ("field_declaration", "constant_declaration"):
            decl.fields.extend(_fields(member))
        elif member.type == "method_declaration":
            decl.methods.append(_method(member))
        elif member.type == "constructor_declaration":
            decl.constructors.append(_constructor(member))
        elif member.type == "enum_constant":
            const_tags, _ = _modifiers(member)
            decl.enum_constants.append(EnumConstantDecl(
                name=_text(member.child_by_field_name("name")),
                doc=_doc_for(member),
                tags=const_tags,
            ))
    return decl


def _body_members(node: Node) -> list[Node]:
    body = node.child_by_field_name("body")
    if body is None:
        return []
    members = []
    for child in body.named_children:
        if child.type == "enum_body_declarations":
            members.extend(child.named_children)
        else:
            members.append(child)
    return members


def _fields(node: Node) -> list[FieldDecl]:
    tags, modifiers = _modifiers(node)
    if node.type == "constant_declaration":
        modifiers = modifiers | {"static", "final"}
    doc = _doc_for(node)
    base_type = _type_node(node.child_by_field_name("type"))

    fields = []
    for declarator in node.children_by_field_name("declarator"):
        fields.append(FieldDecl(
            name=_text(declarator.child_by_field_name("name")),
            type=_with_dimensions(base_type, declarator.child_by_field_name("dimensions")),
            tags=tags,
            doc=doc,
            modifiers=modifiers,
        ))
    return fields


def _method(node: Node) -> MethodDecl:
    tags, modifiers = _modifiers(node)
    params = node.child_by_field_name("parameters")
    return MethodDecl(
        name=_text(node.child_by_field_name("name")),
        return_type=_type_node(node.child_by_field_name("type")),
        parameters=_parameters(params) if params is not None else [],
        tags=tags,
        doc=_doc_for(node),
        modifiers=modifiers,
    )


def _constructor(node: Node) -> ConstructorDecl:
    tags, _ = _modifiers(node)
    params = node.child_by_field_name("parameters")
    return ConstructorDecl(
        parameters=_parameters(params) if params is not None else [],
        tags=tags,
        doc=_doc_for(node),
    )


def _parameters(node: Node) -> list[ParameterDecl]:
    params = []
    for child in node.named_children:
        if child.type == "formal_parameter":
            tags, _ = _modifiers(child)
            param_type = _with_dimensions(
                _type_node(child.child_by_field_name("type")),
                child.child_by_field_name("dimensions"),
            )
            params.append(ParameterDecl(
                name=_text(child.child_by_field_name("name")),
                type=param_type,
                tags=tags,
            ))
        elif child.type == "spread_parameter":
            tags, _ = _modifiers(child)
            types = _type_children(child)
            declarator = next((c for c in child.named_children if c.type == "variable_declarator"), None)
            if not types or declarator is None:
                continue
            params.append(ParameterDecl(
                name=_text(declarator.child_by_field_name("name")),
                type=TypeNode.array_of(_type_node(types[0])),
                tags=tags,
            ))
    return params


# -- modifiers and tags -------------------------------------------------------


def _modifiers(node: Node) -> tuple[list[Tag], frozenset[str]]:
    tags: list[Tag] = []
    words: set[str] = set()
    for child in node.children:
        if child.type != "modifiers":
            continue
        for item in child.children:
            if item.type in _ANNOTATIONS:
                tags.append(_tag(item))
            elif not item.is_named:
                words.add(item.type)
    return tags, frozenset(words)


def _tag(node: Node) -> Tag:
    attributes: dict[str, str] = {}
    arguments = node.child_by_field_name("arguments")
    if arguments is not None:
        for arg in arguments.named_children:
            if arg.type in _COMMENTS:
                continue
            if arg.type == "element_value_pair":
                key = arg.child_by_field_name("key")
                value = arg.child_by_field_name("value")
                if key is not None and value is not None:
                    attributes[_text(key)] = _text(value)
            else:
                attributes["value"] = _text(arg)
    return Tag(name=_simple_name(node.child_by_field_name("name")), attributes=attributes)


def _doc_for(node: Node) -> DocComment:
    """The nearest Javadoc comment directly above a declaration."""
    prev = node.prev_named_sibling
    while prev is not None and prev.type in _COMMENTS:
        text = _text(prev)
        if is_javadoc(text):
            return parse_javadoc(text)
        prev = prev.prev_named_sibling
    return DocComment()


# -- types --------------------------------------------------------------------


def _type_node(node: Node | None) -> TypeNode:
    if node is None:
        return TypeNode("void")

    if node.type == "generic_type":
        base = ""
        args: tuple[TypeNode, ...] = ()
        for child in node.named_children:
            if child.type in ("type_identifier", "scoped_type_identifier"):
                base = _simple_name(child)
            elif child.type == "type_arguments":
                args = tuple(_type_node(a) for a in _type_children(child))
        return TypeNode(name=base or _simple_name(node), args=args)

    if node.type == "array_type":
        element = _type_node(node.child_by_field_name("element"))
        return _with_dimensions(element, node.child_by_field_name("dimensions"), default=1)

    if node.type == "wildcard":
        return TypeNode(WILDCARD)

    if node.type == "annotated_type":
        types = _type_children(node)
        return _type_node(types[-1]) if types else TypeNode(_simple_name(node))

    return TypeNode(_simple_name(node))


def _type_children(node: Node) -> list[Node]:
    return [c for c in node.named_children if c.type not in _NOT_TYPES]


def _with_dimensions(element: TypeNode, dims: Node | None, default: int = 0) -> TypeNode:
    count = _text(dims).count("[") if dims is not None else default
    for _ in range(count):
        element = TypeNode.array_of(element)
    return element


# -- text helpers -------------------------------------------------------------


def _package_name(root: Node) -> str:
    for child in root.named_children:
        if child.type != "package_declaration":
            continue
        for part in child.named_children:
            if part.type in ("scoped_identifier", "identifier"):
                return "".join(_text(part).split())
    return ""


def _simple_name(node: Node | None) -> str:
    return "".join(_text(node).split()).rsplit(".", 1)[-1]


def _text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")
