from pathlib import Path

import pytest

from autodoc.errors import SourceParseError
from autodoc.parser.declarations import DeclarationKind, TypeNode
from autodoc.parser.java import JavaSourceParser, iter_java_files

FIXTURES = Path(__file__).parent / "fixtures"


def _parse_one(source: str):
    decls = JavaSourceParser().parse_source(source)
    assert len(decls) == 1
    return decls[0]


class TestTypeDeclarations:
    def test_class_with_package_and_supertypes(self):
        decl = _parse_one("""
            package com.example.model;

            public class User extends BaseEntity implements Serializable, Comparable<User> {
            }
        """)
        assert decl.name == "User"
        assert decl.namespace == "com.example.model"
        assert decl.qualified_name == "com.example.model.User"
        assert decl.kind is DeclarationKind.CLASS
        assert decl.superclass == TypeNode("BaseEntity")
        assert [i.name for i in decl.interfaces] == ["Serializable", "Comparable"]
        assert decl.interfaces[1].args == (TypeNode("User"),)

    def test_default_package(self):
        decl = _parse_one("class Plain {}")
        assert decl.namespace == ""
        assert decl.qualified_name == "Plain"

    def test_interface_extends_list(self):
        decl = _parse_one("interface Named extends Identifiable, Cloneable {}")
        assert decl.kind is DeclarationKind.INTERFACE
        assert [i.name for i in decl.interfaces] == ["Identifiable", "Cloneable"]

    def test_supertypes_are_type_nodes(self):
        decl = _parse_one("""
            class Page extends com.example.Base<Item> implements Iterable<Item> {
                void add(Item... items) {}
            }
        """)
        assert isinstance(decl.superclass, TypeNode)
        assert decl.superclass == TypeNode("Base", (TypeNode("Item"),))
        assert all(isinstance(i, TypeNode) for i in decl.interfaces)
        assert decl.interfaces == [TypeNode("Iterable", (TypeNode("Item"),))]
        varargs = decl.methods[0].parameters[0].type
        assert isinstance(varargs, TypeNode)
        assert varargs == TypeNode.array_of(TypeNode("Item"))

    def test_class_without_supertypes(self):
        decl = _parse_one("class Plain {}")
        assert decl.superclass is None
        assert decl.interfaces == []

    def test_abstract_modifier(self):
        decl = _parse_one("public abstract class Base {}")
        assert decl.is_abstract

    def test_nested_types_are_flattened(self):
        decls = JavaSourceParser().parse_source("""
            package p;
            public class Outer {
                public static class Inner {}
                enum Mode { ON, OFF }
            }
        """)
        assert [d.qualified_name for d in decls] == ["p.Outer", "p.Outer.Inner", "p.Outer.Mode"]
        assert decls[2].kind is DeclarationKind.ENUM

    def test_record_components_become_fields(self):
        decl = _parse_one("public record Point(@NotNull Integer x, int y) {}")
        assert decl.kind is DeclarationKind.RECORD
        assert [f.name for f in decl.fields] == ["x", "y"]
        assert decl.fields[0].tags[0].name == "NotNull"
        assert not decl.fields[0].is_final


class TestMembers:
    def test_fields_with_modifiers(self):
        decl = _parse_one("""
            class User {
                private static final long serialVersionUID = 1L;
                private String first, last;
                private int[] scores;
            }
        """)
        assert [f.name for f in decl.fields] == ["serialVersionUID", "first", "last", "scores"]
        assert decl.fields[0].is_static and decl.fields[0].is_final
        assert not decl.fields[1].is_static
        assert decl.fields[3].type == TypeNode.array_of(TypeNode("int"))

    def test_generic_and_wildcard_types(self):
        decl = _parse_one("""
            class Holder {
                private Map<String, List<? extends Number>> index;
                private java.util.Set<Long> ids;
            }
        """)
        index = decl.fields[0].type
        assert index.name == "Map"
        assert index.args[0] == TypeNode("String")
        assert index.args[1] == TypeNode("List", (TypeNode("?"),))
        assert decl.fields[1].type == TypeNode("Set", (TypeNode("Long"),))

    def test_method_with_tagged_parameters(self):
        decl = _parse_one("""
            class Api {
                @GetMapping("/{id}")
                public List<User> find(@PathVariable("id") Long userId, String... names) {
                    return null;
                }
            }
        """)
        method = decl.methods[0]
        assert method.name == "find"
        assert method.return_type == TypeNode("List", (TypeNode("User"),))
        assert method.tags[0].name == "GetMapping"
        assert method.tags[0].get_string("value") == "/{id}"
        assert method.parameters[0].name == "userId"
        assert method.parameters[0].tags[0].get_string("value") == "id"
        assert method.parameters[1].type.is_array

    def test_varargs_parameter(self):
        decl = _parse_one("""
            class Api {
                void tag(@RequestParam("t") final List<String>... tags) {}
            }
        """)
        [param] = decl.methods[0].parameters
        assert param.name == "tags"
        assert param.type == TypeNode.array_of(TypeNode("List", (TypeNode("String"),)))
        assert param.tags[0].name == "RequestParam"

    def test_void_return_type(self):
        decl = _parse_one("class A { void run() {} }")
        assert decl.methods[0].return_type == TypeNode("void")

    def test_constructor_parameters(self):
        decl = _parse_one("""
            class Ctl {
                Ctl(UserService userService, int retries) {}
            }
        """)
        assert [p.name for p in decl.constructors[0].parameters] == ["userService", "retries"]

    def test_enum_constants_and_body(self):
        decl = _parse_one("""
            enum Role {
                /** Full access. */
                ADMIN,
                GUEST;

                public boolean isAdmin() { return this == ADMIN; }
            }
        """)
        assert [c.name for c in decl.enum_constants] == ["ADMIN", "GUEST"]
        assert decl.enum_constants[0].doc.description == "Full access."
        assert decl.enum_constants[1].doc.description == ""
        assert decl.methods[0].name == "isAdmin"

    def test_interface_constants_are_static(self):
        decl = _parse_one("interface Limits { int MAX = 10; }")
        assert decl.fields[0].is_static


class TestTagsAndDocs:
    def test_qualified_tag_name_is_simplified(self):
        decl = _parse_one("@javax.persistence.Entity class E {}")
        assert decl.tags[0].name == "Entity"

    def test_tag_attributes_keep_source_text(self):
        decl = _parse_one("""
            @RequestMapping(value = {"/a", "/b"}, method = RequestMethod.POST)
            class C {}
        """)
        tag = decl.tags[0]
        assert tag.get("method") == "RequestMethod.POST"
        assert tag.get_strings("value") == ["/a", "/b"]
        assert tag.get_string("value") == "/a"

    def test_javadoc_attached_to_declarations(self):
        decl = _parse_one("""
            /** A user. */
            @Entity
            class User {
                // not documentation
                /**
                 * Login name.
                 * @deprecated use email
                 */
                @Deprecated
                private String login;

                /* plain block comment */
                private String email;
            }
        """)
        assert decl.doc.description == "A user."
        assert decl.fields[0].doc.description == "Login name."
        assert decl.fields[0].doc.deprecated == "use email"
        assert decl.fields[1].doc.description == ""

    def test_syntax_errors_still_produce_declarations(self, caplog):
        decls = JavaSourceParser().parse_source("class Broken { void f() { int x = ; } }", origin="Broken.java")
        assert decls[0].name == "Broken"
        assert "syntax errors" in caplog.text


class TestFiles:
    def test_iter_java_files_is_sorted(self):
        files = iter_java_files(FIXTURES / "shop")
        assert files == sorted(files)
        assert all(f.suffix == ".java" for f in files)
        assert len(files) == 10

    def test_parse_paths_accepts_files_and_directories(self):
        parser = JavaSourceParser()
        model_dir = FIXTURES / "shop" / "com" / "example" / "model"
        controller = FIXTURES / "shop" / "com" / "example" / "controller" / "UserController.java"
        decls = parser.parse_paths([controller, model_dir])
        assert decls[0].name == "UserController"
        assert {d.name for d in decls[1:]} == {
            "ApiResponse", "BaseEntity", "Identifiable", "Order", "Role", "User",
        }
        assert decls[0].origin == str(controller)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(SourceParseError) as exc:
            JavaSourceParser().parse_file(tmp_path / "Missing.java")
        assert "Missing.java" in str(exc.value)

    def test_undecodable_file_raises(self, tmp_path):
        f = tmp_path / "Latin.java"
        f.write_bytes(b"class Caf\xe9 {}")
        with pytest.raises(SourceParseError, match="UTF-8"):
            JavaSourceParser().parse_file(f)
