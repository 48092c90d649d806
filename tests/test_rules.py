"""Tests for the rewrite rule catalog."""

from __future__ import annotations

import pytest

from pattern_optimizer.schemas import OptimizationType
from pattern_optimizer.rules import get_registry, rules_for
from pattern_optimizer.rules.base import Rule, RuleRegistry
from pattern_optimizer.rules.memoization import FibonacciMemoizationRule
from pattern_optimizer.rules.nested_loops import NestedLoopFlatteningRule
from pattern_optimizer.rules.comprehension import ListComprehensionRule
from pattern_optimizer.rules.xss import InnerHtmlRule
from pattern_optimizer.rules.style import (
    CodeStyleRule,
    NamingConventionsRule,
    to_snake_case,
)


FIBONACCI = (
    "function fibonacci(n) { if (n<=0) return 0; if (n===1) return 1; "
    "return fibonacci(n-1)+fibonacci(n-2); }"
)

NESTED_LOOPS = """for (let i = 0; i < array.length; i++) {
  for (let j = 0; j < array.length; j++) {
    total += array[i] + array[j];
  }
}"""


class TestRuleRegistry:
    """Tests for the rule registry."""

    def test_registry_has_rules(self):
        """Test that the registry has the catalog rules in priority order."""
        rule_names = [r.name for r in get_registry().get_rules()]

        assert rule_names == [
            "fibonacci_memoization",
            "nested_loop_flattening",
            "python_list_comprehension",
            "inner_html_to_text_content",
            "code_style_standardization",
        ]

    def test_fallback_is_kept_apart(self):
        """Test that the fallback rule is not part of the per-type lists."""
        registry = get_registry()

        assert registry.fallback is not None
        assert registry.fallback.name == "naming_conventions"
        assert registry.fallback not in registry.get_rules()

    def test_rules_for_javascript_performance(self):
        """Test ordering of JavaScript performance rules."""
        names = [r.name for r in rules_for("javascript", OptimizationType.PERFORMANCE)]

        assert names == ["fibonacci_memoization", "nested_loop_flattening"]

    def test_rules_for_python(self):
        """Test that Python only gets the comprehension rule."""
        names = [r.name for r in rules_for("python", OptimizationType.PERFORMANCE)]

        assert names == ["python_list_comprehension"]
        assert rules_for("python", OptimizationType.SECURITY) == []

    def test_rules_for_language_alias(self):
        """Test that language aliases resolve."""
        names = [r.name for r in rules_for("JS", OptimizationType.SECURITY)]

        assert names == ["inner_html_to_text_content"]

    def test_unknown_language_yields_no_rules(self):
        """Test that an unknown language is an empty rule set, not an error."""
        for opt_type in OptimizationType:
            assert rules_for("cobol", opt_type) == []

    def test_first_match_respects_order(self):
        """Test that the first registered matching rule wins."""
        code = FIBONACCI + "\n" + NESTED_LOOPS
        rule = get_registry().first_match(code, "javascript", OptimizationType.PERFORMANCE)

        assert rule is not None
        assert rule.name == "fibonacci_memoization"

    def test_first_match_none(self):
        """Test that no match returns None."""
        rule = get_registry().first_match("let x = 1;", "javascript", OptimizationType.PERFORMANCE)

        assert rule is None

    def test_custom_registry(self):
        """Test registering rules on a fresh registry."""
        registry = RuleRegistry()
        registry.register(InnerHtmlRule())

        assert [r.name for r in registry.get_rules()] == ["inner_html_to_text_content"]
        assert registry.fallback is None

    def test_score_for(self):
        """Test declared scores per axis."""
        rule = InnerHtmlRule()

        assert rule.score_for(OptimizationType.SECURITY) == 92
        assert rule.score_for(OptimizationType.PERFORMANCE) is None


class TestFibonacciMemoizationRule:
    """Tests for the Fibonacci memoization rule."""

    def test_detects_naive_fibonacci(self):
        """Test detection of the doubly recursive form."""
        assert FibonacciMemoizationRule().detect(FIBONACCI)

    def test_rewrite_adds_memo(self):
        """Test that the rewrite threads a memo parameter."""
        rewritten = FibonacciMemoizationRule().rewrite(FIBONACCI)

        assert "function fibonacci(n, memo = {})" in rewritten
        assert "memo[n] = fibonacci(n - 1, memo) + fibonacci(n - 2, memo);" in rewritten
        assert rewritten.rstrip().endswith("}")

    def test_rewrite_is_idempotent(self):
        """Test that rewriting twice equals rewriting once."""
        rule = FibonacciMemoizationRule()
        once = rule.rewrite(FIBONACCI)

        assert not rule.detect(once)
        assert rule.rewrite(once) == once

    def test_rewrites_every_declaration(self):
        """Test that rewriting is idempotent with two naive declarations."""
        code = FIBONACCI + "\n" + FIBONACCI
        rule = FibonacciMemoizationRule()
        once = rule.rewrite(code)

        assert once.count("function fibonacci(n, memo = {})") == 2
        assert not rule.detect(once)
        assert rule.rewrite(once) == once

    def test_ignores_memoized_function(self):
        """Test that an already memoized function is not matched."""
        code = "function fibonacci(n, memo = {}) { return fibonacci(n - 1, memo) + fibonacci(n - 2, memo); }"

        assert not FibonacciMemoizationRule().detect(code)

    def test_ignores_other_functions(self):
        """Test that unrelated recursion is not matched."""
        code = "function factorial(n) { return n * factorial(n - 1); }"

        assert not FibonacciMemoizationRule().detect(code)


class TestNestedLoopFlatteningRule:
    """Tests for the nested loop flattening rule."""

    def test_flattens_nested_loops(self):
        """Test rewriting to a single loop over the product of bounds."""
        rule = NestedLoopFlatteningRule()

        assert rule.detect(NESTED_LOOPS)
        rewritten = rule.rewrite(NESTED_LOOPS)

        assert rewritten.count("for (") == 1
        assert "idx < array.length * array.length" in rewritten
        assert "const i = Math.floor(idx / array.length);" in rewritten
        assert "const j = idx % array.length;" in rewritten
        assert "total += array[i] + array[j];" in rewritten

    def test_adjacent_index_blocks_flattening(self):
        """Test that a body reading j + 1 is left alone."""
        code = """for (let i = 0; i < rows; i++) {
  for (let j = 0; j < cols; j++) {
    diff += grid[i][j + 1] - grid[i][j];
  }
}"""
        rule = NestedLoopFlatteningRule()

        assert not rule.detect(code)
        assert rule.rewrite(code) == code

    def test_compound_bounds_are_parenthesized(self):
        """Test that non-trivial bounds keep their precedence."""
        code = "for (let i = 0; i < n - 1; i++) { for (let j = 0; j < m; j++) { visit(i, j); } }"
        rewritten = NestedLoopFlatteningRule().rewrite(code)

        assert "idx < (n - 1) * m" in rewritten
        assert "const j = idx % m;" in rewritten

    def test_rewrite_is_idempotent(self):
        """Test that a flattened loop is not matched again."""
        rule = NestedLoopFlatteningRule()
        once = rule.rewrite(NESTED_LOOPS)

        assert not rule.detect(once)
        assert rule.rewrite(once) == once

    def test_single_loop_not_matched(self):
        """Test that a single loop is not matched."""
        code = "for (let i = 0; i < n; i++) { sum += i; }"

        assert not NestedLoopFlatteningRule().detect(code)


class TestListComprehensionRule:
    """Tests for the Python list comprehension rule."""

    def test_plain_accumulator(self):
        """Test rewriting an unguarded append loop."""
        code = "results = []\nfor i in range(10):\n    results.append(i * 2)\n"
        rule = ListComprehensionRule()

        assert rule.detect(code)
        assert rule.rewrite(code) == "results = [i * 2 for i in range(10)]\n"

    def test_guarded_accumulator(self):
        """Test rewriting an append loop guarded by if."""
        code = (
            "def evens(items):\n"
            "    result = []\n"
            "    for item in items:\n"
            "        if item % 2 == 0:\n"
            "            result.append(item)\n"
            "    return result\n"
        )
        rewritten = ListComprehensionRule().rewrite(code)

        assert "    result = [item for item in items if item % 2 == 0]\n" in rewritten
        assert "append" not in rewritten
        assert rewritten.endswith("    return result\n")

    def test_nested_call_in_append(self):
        """Test that calls inside the appended expression are kept whole."""
        code = "names = []\nfor user in users:\n    names.append(format_name(user))\n"
        rewritten = ListComprehensionRule().rewrite(code)

        assert rewritten == "names = [format_name(user) for user in users]\n"

    def test_different_accumulator_not_matched(self):
        """Test that appending to another list is not matched."""
        code = "results = []\nfor i in range(3):\n    other.append(i)\n"

        assert not ListComprehensionRule().detect(code)

    def test_statements_after_append_block_rewrite(self):
        """Test that a loop body continuing after the append is left alone."""
        code = "acc = []\nfor x in xs:\n    acc.append(x)\n    total += x\n"
        rule = ListComprehensionRule()

        assert not rule.detect(code)
        assert rule.rewrite(code) == code

    def test_guard_with_else_not_matched(self):
        """Test that an if guard with an else branch is left alone."""
        code = (
            "acc = []\n"
            "for x in xs:\n"
            "    if x:\n"
            "        acc.append(x)\n"
            "    else:\n"
            "        skipped += 1\n"
        )
        rule = ListComprehensionRule()

        assert not rule.detect(code)
        assert rule.rewrite(code) == code

    def test_for_else_not_matched(self):
        """Test that a loop with an else clause is left alone."""
        code = "acc = []\nfor x in xs:\n    acc.append(x)\nelse:\n    done()\n"

        assert not ListComprehensionRule().detect(code)

    def test_dedent_to_enclosing_block(self):
        """Test a loop closed by a line less indented than the loop."""
        code = (
            "def build(xs):\n"
            "    if xs:\n"
            "        acc = []\n"
            "        for x in xs:\n"
            "            acc.append(x + 1)\n"
            "    return None\n"
        )
        rewritten = ListComprehensionRule().rewrite(code)

        assert "        acc = [x + 1 for x in xs]\n    return None\n" in rewritten

    def test_python_only(self):
        """Test that the rule is declared for Python only."""
        rule = ListComprehensionRule()

        assert rule.applies_to("python")
        assert rule.applies_to("py")
        assert not rule.applies_to("javascript")


class TestInnerHtmlRule:
    """Tests for the innerHTML rule."""

    def test_rewrites_assignment(self):
        """Test replacing innerHTML assignments."""
        code = "element.innerHTML = x;"
        rule = InnerHtmlRule()

        assert rule.detect(code)
        assert rule.rewrite(code) == "element.textContent = x;"

    def test_rewrites_all_occurrences(self):
        """Test that every assignment is rewritten."""
        code = "a.innerHTML = 1;\nb.innerHTML= 2;"
        rewritten = InnerHtmlRule().rewrite(code)

        assert ".innerHTML" not in rewritten
        assert rewritten.count(".textContent =") == 2

    def test_comparison_not_matched(self):
        """Test that innerHTML comparisons are not treated as assignments."""
        code = "if (el.innerHTML == '') { show(); }"

        assert not InnerHtmlRule().detect(code)


class TestCodeStyleRule:
    """Tests for the code style rule."""

    def test_var_to_const(self):
        """Test replacing var declarations."""
        rewritten = CodeStyleRule().rewrite("var count = 1;")

        assert rewritten == "const count = 1;"

    def test_declared_camel_case_renamed(self):
        """Test re-casing identifiers the source declares."""
        code = "var userName = 'a';\nconsole.log(userName);"
        rewritten = CodeStyleRule().rewrite(code)

        assert rewritten == "const user_name = 'a';\nconsole.log(user_name);"

    def test_property_access_untouched(self):
        """Test that property names keep their spelling."""
        code = "const itemCount = 2;\nobj.itemCount = itemCount;"
        rewritten = CodeStyleRule().rewrite(code)

        assert rewritten == "const item_count = 2;\nobj.itemCount = item_count;"

    def test_library_call_detected_but_unchanged(self):
        """Test that mixed case detection alone may produce no change."""
        code = "document.getElementById('x');"
        rule = CodeStyleRule()

        assert rule.detect(code)
        assert rule.rewrite(code) == code

    @pytest.mark.parametrize(
        "name,expected",
        [("userName", "user_name"), ("maxItemCount", "max_item_count"), ("plain", "plain")],
    )
    def test_to_snake_case(self, name, expected):
        """Test camelCase to snake_case conversion."""
        assert to_snake_case(name) == expected


class TestNamingConventionsRule:
    """Tests for the fallback naming rule."""

    def test_always_detects(self):
        """Test that the fallback matches any input."""
        rule = NamingConventionsRule()

        assert rule.detect("")
        assert rule.detect("anything at all")

    def test_any_language(self):
        """Test that the fallback applies to every language."""
        rule = NamingConventionsRule()

        assert rule.applies_to("cobol")
        assert rule.applies_to("")

    def test_renames_ambiguous_declarations(self):
        """Test replacing well-known ambiguous names."""
        code = "var i = 0;\nvar tmp = i;"
        rewritten = NamingConventionsRule().rewrite(code)

        assert rewritten == "const index = 0;\nconst temporary = i;"

    def test_leaves_other_code(self):
        """Test that code without ambiguous declarations is unchanged."""
        code = "var total = 0;"

        assert NamingConventionsRule().rewrite(code) == code

    def test_is_a_rule(self):
        """Test the fallback implements the rule interface."""
        assert isinstance(NamingConventionsRule(), Rule)
