"""Parse-then-render behavior of the HTL state machine."""

import unittest

from htl import HTL, ElementNode, TextNode, parse, to_html


def render(text):
    root, error = parse(text)
    assert error is None, str(error)
    return to_html(root)


class TestParse(unittest.TestCase):
    def test_reference_cases(self):
        cases = [
            ("", ""),
            ('(a :href http://foo.bar/{{user}} "안녕")', '<a href="http://foo.bar/{{user}}">안녕</a>'),
            ("(a :href foo)", '<a href="foo"></a>'),
            ("(br)", "<br/>"),
            ("(a :href foo )", '<a href="foo"></a>'),
            ("(a b)", "<a>b</a>"),
            ("(a b(c d))", "<a>b<c>d</c></a>"),
            ("(a (b (c)))", "<a><b><c></c></b></a>"),
            ("(a(b(c)))", "<a><b><c></c></b></a>"),
            ('(a "x\\ty\\nz")', "<a>x\ty\nz</a>"),
            (
                '(a :x 1 (b :z 2 :y 3 (c "foo bar" "baz")))',
                '<a x="1"><b y="3" z="2"><c>foo barbaz</c></b></a>',
            ),
            (r'''(a :x "\\<>'\"" "content")''', r'<a x="\&lt;&gt;&apos;&quot;">content</a>'),
            (
                '(a ;comments\n :x ;comments\n"\\\\<>\'\\"" ;comments \n"content")',
                r'<a x="\&lt;&gt;&apos;&quot;">content</a>',
            ),
            ('(a "b" ; "c"\n ;; "d"\n)', "<a>b</a>"),
            ('(a "x(y);z:w")', "<a>x(y);z:w</a>"),
        ]
        for text, expected in cases:
            with self.subTest(text=text):
                assert render(text) == expected

    def test_empty_input_is_neither_tree_nor_error(self):
        assert parse("") == (None, None)
        assert to_html(None) == ""

    def test_root_is_anonymous_element(self):
        root, error = parse("(a)")
        assert error is None
        assert isinstance(root, ElementNode)
        assert root.tag == ""
        assert [child.tag for child in root.children] == ["a"]

    def test_multiple_top_level_elements_are_siblings(self):
        root, _ = parse("(a) (b :k v)\n(c)")
        assert [child.tag for child in root.children] == ["a", "b", "c"]
        assert to_html(root) == '<a></a><b k="v"></b><c></c>'

    def test_attribute_order_is_lexicographic(self):
        assert render("(a :x 1 (b :z 2 :y 3 (c)))") == '<a x="1"><b y="3" z="2"><c></c></b></a>'
        assert render("(p :b 2 :a 1 :c 3)") == '<p a="1" b="2" c="3"></p>'

    def test_attribute_last_write_wins(self):
        root, _ = parse("(a :k 1 :k 2)")
        assert root.children[0].attrs == {"k": "2"}
        assert to_html(root) == '<a k="2"></a>'

    def test_quoted_attribute_value(self):
        assert render('(a :title "one <two>")') == '<a title="one &lt;two&gt;"></a>'
        assert render('(a :title"x")') == '<a title="x"></a>'

    def test_attribute_after_content(self):
        assert render("(a b :k v)") == '<a k="v">b</a>'

    def test_void_tags(self):
        assert render("(br)") == "<br/>"
        assert render("(hr)") == "<hr/>"
        assert render("(img :src a.png :alt x)") == '<img alt="x" src="a.png"/>'
        assert render("(meta :charset utf-8)") == '<meta charset="utf-8"/>'
        assert render("(link :rel stylesheet)") == '<link rel="stylesheet"/>'

    def test_void_tag_with_children_is_paired(self):
        assert render("(br x)") == "<br>x</br>"

    def test_escape_table(self):
        assert render('(a "\\f\\r\\v")') == "<a>\f\r\v</a>"
        assert render('(a "x\\qy")') == "<a>xqy</a>"
        assert render('(a "\\<\\&")') == "<a>&lt;&amp;</a>"

    def test_escaped_and_literal_backslash_render_alike(self):
        assert render('(a "\\\\")') == "<a>\\</a>"

    def test_quoted_text_is_html_escaped(self):
        assert render("(a \"<b> & 'c'\")") == "<a>&lt;b&gt; &amp; &apos;c&apos;</a>"

    def test_bare_tokens_are_not_escaped(self):
        assert render("(a b<c)") == "<a>b<c</a>"
        assert render("(a :href x&y)") == '<a href="x&y"></a>'
        assert render("(a b>c&d'e)") == "<a>b>c&d'e</a>"

    def test_colon_and_semicolon_inside_bare_token(self):
        assert render("(a b:c)") == "<a>b:c</a>"
        assert render("(a b;c)") == "<a>b;c</a>"

    def test_adjacent_strings_and_symbols(self):
        assert render('(a"x")') == "<a>x</a>"
        assert render('(a "x"y)') == "<a>xy</a>"
        assert render('(a x"y")') == "<a>xy</a>"

    def test_nbsp_text(self):
        assert render("(td _)") == "<td>&nbsp;</td>"
        assert render('(td "_")') == "<td>&nbsp;</td>"
        assert render("(td __)") == "<td>__</td>"

    def test_anonymous_groups(self):
        assert render("((a) (b))") == "<a></a><b></b>"
        assert render("( x)") == "x"
        assert render("()") == ""

    def test_comments_are_transparent(self):
        assert render('(a "b" ; comment\n)') == render('(a "b")')
        assert render("; leading comment\n(a)") == "<a></a>"
        assert render("(a) ; trailing comment without newline") == "<a></a>"

    def test_comment_keeps_attribute_context(self):
        assert render("(a :k ; the value follows\n v)") == '<a k="v"></a>'

    def test_whitespace_variants(self):
        assert render("(a\n\tb\r\n(c))") == "<a>b<c></c></a>"

    def test_unicode_space_separators(self):
        assert render("(a\u3000b\xa0c\u2028d)") == "<a>bcd</a>"
        assert render("(a\x85b)") == "<a>b</a>"

    def test_information_separators_are_token_characters(self):
        assert render("(a\x1fb)") == "<a\x1fb></a\x1fb>"
        assert render("(p x\x1cy)") == "<p>x\x1cy</p>"

    def test_text_children_are_separate_nodes(self):
        root, _ = parse('(a "x" y "z")')
        children = root.children[0].children
        assert all(isinstance(child, TextNode) for child in children)
        assert [child.data for child in children] == ["x", "y", "z"]

    def test_deepest_allowed_nesting(self):
        text = "(a" * 255 + ")" * 255
        assert render(text) == "<a>" * 255 + "</a>" * 255

    def test_reparse_is_not_a_round_trip(self):
        once = render("(a :href foo)")
        assert once == '<a href="foo"></a>'
        # Spaces separate tokens and a trailing bare token outside any
        # element is never committed.
        assert render(once) == "<ahref=foo"

    def test_top_level_bare_token_is_dropped(self):
        assert render("abc") == ""
        assert render('"abc"') == "abc"

    def test_parses_are_independent(self):
        first, _ = parse("(a (b))")
        second, _ = parse("(c)")
        assert to_html(first) == "<a><b></b></a>"
        assert to_html(second) == "<c></c>"


class TestHTL(unittest.TestCase):
    def test_to_html(self):
        doc = HTL('(p :class lead "hello")')
        assert doc.error is None
        assert doc.to_html() == '<p class="lead">hello</p>'

    def test_none_input(self):
        doc = HTL(None)
        assert doc.root is None
        assert doc.error is None
        assert doc.to_html() == ""

    def test_error_is_collected(self):
        doc = HTL("(a")
        assert doc.root is None
        assert doc.error.code == "missing-closing-paren"
        assert doc.to_html() == ""

    def test_debug_mode_parses_identically(self):
        with self.assertLogs("htl.parser", level="DEBUG") as logs:
            doc = HTL("(a (b))", debug=True)
        assert doc.to_html() == "<a><b></b></a>"
        assert any("push" in line for line in logs.output)
