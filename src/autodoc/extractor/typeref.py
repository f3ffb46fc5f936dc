"""Type reference resolution."""

from autodoc.ir import TypeRef
from autodoc.parser.declarations import WILDCARD, TypeNode

ARRAY_BASE = "Array"


def resolve(node: TypeNode) -> TypeRef:
    """Resolve a source type into a TypeRef.

    Generic arguments are resolved recursively in source order; wildcard
    arguments are dropped. Arrays become ``Array<element>``.
    """
    if node.is_array:
        return TypeRef(base=ARRAY_BASE, args=(resolve(node.args[0]),))

    args = []
    for arg in node.args:
        resolved = resolve(arg)
        if resolved.base != WILDCARD:
            args.append(resolved)
    return TypeRef(base=node.name, args=tuple(args))
