from autodoc.parser.declarations import DocComment
from autodoc.parser.javadoc import is_javadoc, parse_javadoc


class TestIsJavadoc:
    def test_detects_doc_comments(self):
        assert is_javadoc("/** Docs. */")
        assert not is_javadoc("/* plain */")
        assert not is_javadoc("/**/")
        assert not is_javadoc("// line")


class TestParseJavadoc:
    def test_description_and_block_tags(self):
        doc = parse_javadoc("""/**
         * Fetch a user by id. Unknown ids yield 404.
         *
         * @param id the user
         *           identifier
         * @return the user
         * @since 2.0
         */""")
        assert doc.description == "Fetch a user by id. Unknown ids yield 404."
        assert doc.params == {"id": "the user identifier"}
        assert doc.returns == "the user"
        assert doc.since == "2.0"
        assert doc.deprecated is None

    def test_inline_tags_reduced_to_text(self):
        doc = parse_javadoc("/** Returns a {@link User} or {@code null}. */")
        assert doc.description == "Returns a User or null."

    def test_deprecated_notes(self):
        doc = parse_javadoc("/**\n * Old.\n * @deprecated use {@link #email} instead\n */")
        assert doc.deprecated == "use #email instead"

    def test_multi_paragraph_description(self):
        doc = parse_javadoc("/**\n * First line.\n *\n *\n *\n * Second paragraph.\n */")
        assert doc.description == "First line.\n\nSecond paragraph."

    def test_non_javadoc_gives_empty_doc(self):
        assert parse_javadoc("/* nothing */") == DocComment()


class TestSummary:
    def test_first_sentence(self):
        assert DocComment(description="Lists users. Paged.").summary == "Lists users."

    def test_dotted_words_do_not_end_sentence(self):
        doc = DocComment(description="Uses java.util.List internally. More.")
        assert doc.summary == "Uses java.util.List internally."

    def test_without_period(self):
        assert DocComment(description="List users\nacross pages").summary == "List users across pages"

    def test_empty(self):
        assert DocComment().summary == ""
