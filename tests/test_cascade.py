"""Tests for cascade resolution."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from style_engine.css import Color, Keyword, Length, Rule, SimpleSelector, StyleSheet, Unit
from style_engine.css.selector import matches, specificity
from style_engine.dom import Element, Text
from style_engine.errors import UnexpectedCharacter, UnrecognizedUnit
from style_engine.parser import parse_css, parse_html
from style_engine.style import (
    StyledNode, format_styled_tree, match_rule, matching_rules, specified_values, style_tree,
)


def _style(markup, css):
    return style_tree(parse_html(markup), parse_css(css))


# ---------------------------------------------------------------------------
# Selector matching
# ---------------------------------------------------------------------------


class TestMatching:
    ELEMENT = Element("div", {"id": "main", "class": "a b"})

    @pytest.mark.parametrize("selector", [
        SimpleSelector(),
        SimpleSelector(tag_name="div"),
        SimpleSelector(id="main"),
        SimpleSelector(classes=["a"]),
        SimpleSelector(classes=["b", "a"]),
        SimpleSelector("div", "main", ["a", "b"]),
    ])
    def test_matches(self, selector):
        assert matches(self.ELEMENT, selector)

    @pytest.mark.parametrize("selector", [
        SimpleSelector(tag_name="p"),
        SimpleSelector(id="other"),
        SimpleSelector(classes=["c"]),
        SimpleSelector(classes=["a", "c"]),
        SimpleSelector("div", "other"),
    ])
    def test_does_not_match(self, selector):
        assert not matches(self.ELEMENT, selector)

    def test_id_selector_needs_id_attribute(self):
        assert not matches(Element("div"), SimpleSelector(id="main"))

    def test_unknown_selector_variant_is_rejected(self):
        with pytest.raises(TypeError):
            matches(self.ELEMENT, "div")
        with pytest.raises(TypeError):
            specificity(object())


class TestMatchRule:
    def test_first_matching_selector_sets_specificity(self):
        rule = parse_css("#main, .a, div { color: red; }").rules[0]
        element = Element("div", {"class": "a"})
        assert match_rule(element, rule) == ((0, 1, 0), rule)

    def test_rule_is_matched_once(self):
        sheet = parse_css(".a, .b, div { color: red; }")
        element = Element("div", {"class": "a b"})
        assert len(matching_rules(element, sheet)) == 1

    def test_no_match(self):
        rule = parse_css("p { color: red; }").rules[0]
        assert match_rule(Element("div"), rule) is None


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestPrecedence:
    def test_class_beats_tag_regardless_of_order(self):
        for css in ("div {color: red;} .cls {color: blue;}",
                    ".cls {color: blue;} div {color: red;}"):
            styled = _style('<div class="cls"></div>', css)
            assert styled.value("color") == Keyword("blue")

    def test_id_beats_many_classes(self):
        css = "#x { color: green; } .a.b.c.d.e { color: blue; }"
        styled = _style('<div id="x" class="a b c d e"></div>', css)
        assert styled.value("color") == Keyword("green")

    def test_equal_specificity_last_rule_wins(self):
        styled = _style('<p class="a b"></p>', ".a { color: red; } .b { color: blue; }")
        assert styled.value("color") == Keyword("blue")

    def test_last_declaration_in_rule_wins(self):
        styled = _style("<p></p>", "p { color: red; color: blue; }")
        assert styled.value("color") == Keyword("blue")

    def test_properties_from_different_rules_are_merged(self):
        styled = _style('<p class="a"></p>', "p { width: 10px; } .a { color: red; }")
        assert styled.specified_values == {
            "width": Length(10, Unit.PX),
            "color": Keyword("red"),
        }

    def test_universal_selector_applies_with_lowest_specificity(self):
        styled = _style("<p></p>", "p { color: red; } * { color: blue; margin: 0px; }")
        assert styled.value("color") == Keyword("red")
        assert styled.value("margin") == Length(0, Unit.PX)

    def test_rule_specificity_comes_from_first_matching_selector(self):
        # the first rule ranks as "#x", its most specific matching selector
        css = "#x, .a { color: red; } .a.b { color: blue; }"
        styled = _style('<p id="x" class="a b"></p>', css)
        assert styled.value("color") == Keyword("red")

    def test_non_matching_rules_are_ignored(self):
        styled = _style("<p></p>", "div { color: red; }")
        assert styled.specified_values == {}


class TestInlineStyles:
    def test_inline_style_wins_over_id(self):
        markup = '<div id="x" style="color:red;"></div>'
        styled = _style(markup, "#x { color: blue; }")
        assert styled.value("color") == Keyword("red")

    def test_inline_style_merges_with_rules(self):
        markup = '<div style="width: 50%;"></div>'
        styled = _style(markup, "div { color: #FF0000; }")
        assert styled.specified_values == {
            "color": Color(255, 0, 0, 255),
            "width": Length(50, Unit.PERCENT),
        }

    def test_inline_style_without_rules(self):
        styled = _style('<p style="color: red;"></p>', "")
        assert styled.value("color") == Keyword("red")

    def test_malformed_inline_style_propagates(self):
        with pytest.raises(UnexpectedCharacter):
            _style('<p style="color red;"></p>', "")

    def test_empty_inline_style(self):
        styled = _style('<p style=""></p>', "p { color: red; }")
        assert styled.value("color") == Keyword("red")


# ---------------------------------------------------------------------------
# Tree structure
# ---------------------------------------------------------------------------


class TestStyledTree:
    MARKUP = '<div class="box"><p>one</p>text<p class="box">two</p></div>'

    def test_children_mirror_source(self):
        root = parse_html(self.MARKUP)
        styled = style_tree(root, parse_css(".box { width: 1px; }"))
        assert len(styled.children) == len(root.children)
        for styled_child, child in zip(styled.children, root.children):
            assert styled_child.node is child

    def test_node_is_the_source_node_not_a_copy(self):
        root = parse_html(self.MARKUP)
        styled = style_tree(root, StyleSheet())
        assert styled.node is root

    def test_text_nodes_have_no_properties(self):
        styled = _style(self.MARKUP, "* { color: red; }")
        text = styled.children[1]
        assert isinstance(text.node, Text)
        assert text.specified_values == {}
        assert styled.children[0].children[0].specified_values == {}

    def test_each_element_is_styled_independently(self):
        styled = _style(self.MARKUP, ".box { width: 1px; }")
        assert styled.value("width") == Length(1, Unit.PX)
        assert styled.children[0].specified_values == {}
        assert styled.children[2].value("width") == Length(1, Unit.PX)

    def test_executor_gives_same_result(self):
        root = parse_html(self.MARKUP)
        sheet = parse_css(".box { width: 1px; } p { color: red; }")
        sequential = style_tree(root, sheet)
        with ThreadPoolExecutor(max_workers=2) as executor:
            parallel = style_tree(root, sheet, executor)
        assert format_styled_tree(parallel) == format_styled_tree(sequential)
        assert [child.node for child in parallel.children] == list(root.children)

    def test_text_root(self):
        styled = style_tree(Text("hi"), parse_css("* { color: red; }"))
        assert styled.specified_values == {}
        assert styled.children == []

    def test_deep_nesting(self):
        depth = 2000
        root = parse_html('<div class="a">' * depth + "</div>" * depth)
        styled = style_tree(root, parse_css(".a { width: 1px; }"))
        assert len(format_styled_tree(styled).splitlines()) == depth

        levels = 1
        while styled.children:
            assert styled.value("width") == Length(1, Unit.PX)
            styled = styled.children[0]
            levels += 1
        assert levels == depth
        assert styled.value("width") == Length(1, Unit.PX)

    def test_deep_nesting_with_executor(self):
        depth = 2000
        root = parse_html("<body>" + "<p>" * depth + "</p>" * depth + "<p></p></body>")
        with ThreadPoolExecutor(max_workers=2) as executor:
            styled = style_tree(root, parse_css("p { color: red; }"), executor)
        assert len(styled.children) == 2
        assert len(format_styled_tree(styled).splitlines()) == depth + 2

    def test_first_malformed_inline_style_in_document_order_is_reported(self):
        root = parse_html('<div><p style="width: 1em;"></p><p style="color red;"></p></div>')
        with pytest.raises(UnrecognizedUnit):
            style_tree(root, StyleSheet())


class TestStyledNodeAccess:
    def test_value_of_missing_property(self):
        styled = _style("<p></p>", "")
        assert styled.value("width") is None

    def test_lookup_fallback_and_default(self):
        styled = _style("<p></p>", "p { margin: 5px; margin-top: 1px; }")
        default = Length(0, Unit.PX)
        assert styled.lookup("margin-top", "margin", default) == Length(1, Unit.PX)
        assert styled.lookup("margin-left", "margin", default) == Length(5, Unit.PX)
        assert styled.lookup("padding-left", "padding", default) is default

    def test_specified_values_for_single_element(self):
        rule = Rule([SimpleSelector("p")], [])
        assert specified_values(Element("p"), StyleSheet([rule])) == {}

    def test_format_styled_tree(self):
        styled = _style("<div><p>hi</p></div>", "p { color: red; width: 2px; }")
        assert format_styled_tree(styled) == (
            "<div> {}\n"
            "  <p> {color: red; width: 2px}\n"
            "    'hi'"
        )

    def test_repr(self):
        styled = StyledNode(Text("x"), {}, [])
        assert "StyledNode" in repr(styled)
