"""
Tests for LaTeX to MathML conversion.
"""

from __future__ import annotations

from content_pipeline.core.services.math_markup import latex_to_mathml
from content_pipeline.core.services.sanitize import sanitize_html


class TestLatexToMathml:
    """Test formula conversion."""

    def test_superscript(self) -> None:
        assert "<msup><mi>x</mi><mn>2</mn></msup>" in latex_to_mathml("x^2")

    def test_subscript_group(self) -> None:
        html = latex_to_mathml("a_{i+1}")
        assert "<msub><mi>a</mi><mrow><mi>i</mi><mo>+</mo><mn>1</mn></mrow></msub>" in html

    def test_fraction(self) -> None:
        html = latex_to_mathml(r"\frac{1}{2}")
        assert "<mfrac><mrow><mn>1</mn></mrow><mrow><mn>2</mn></mrow></mfrac>" in html

    def test_symbols(self) -> None:
        html = latex_to_mathml(r"\alpha \leq \pi")

        assert "<mi>α</mi>" in html
        assert "<mo>≤</mo>" in html
        assert "<mi>π</mi>" in html

    def test_annotation_escaped(self) -> None:
        html = latex_to_mathml("a<b")

        assert '<annotation encoding="application/x-tex">a&lt;b</annotation>' in html
        assert "<mo>&lt;</mo>" in html

    def test_display_mode(self) -> None:
        assert 'class="math-display"' in latex_to_mathml("x", display=True)
        assert "math-display" not in latex_to_mathml("x")

    def test_empty_and_unbalanced(self) -> None:
        """Malformed input still yields markup."""
        assert latex_to_mathml("").startswith("<math")
        assert latex_to_mathml("{x^").endswith("</math>")
        assert latex_to_mathml("x}}").endswith("</math>")

    def test_survives_sanitizer(self) -> None:
        """Generated elements and attributes are all allowlisted."""
        html = latex_to_mathml(r"\frac{a^2}{b_1}", display=True)
        assert sanitize_html(html) == html


class TestLatexCommands:
    """Test delimiters, text runs, roots and spacing."""

    def test_left_right_render_delimiters_only(self) -> None:
        html = latex_to_mathml(r"f(x) = \left( \text{if } x \right)")

        assert (
            "<mi>f</mi><mo>(</mo><mi>x</mi><mo>)</mo><mo>=</mo>"
            "<mo>(</mo><mi>if</mi><mi>x</mi><mo>)</mo>"
        ) in html
        assert "<mi>left</mi>" not in html
        assert "<mi>right</mi>" not in html
        assert "<mi>text</mi>" not in html

    def test_empty_delimiter(self) -> None:
        """\\left. opens an invisible delimiter."""
        html = latex_to_mathml(r"\left. x \right|")

        assert "<mrow></mrow><mi>x</mi><mo>|</mo>" in html
        assert "<mo>.</mo>" not in html

    def test_escaped_brace_delimiter(self) -> None:
        assert "<mo>{</mo><mi>x</mi>" in latex_to_mathml(r"\left\{ x \right.")

    def test_text_run_keeps_inner_spaces(self) -> None:
        assert "<mi>for all n</mi>" in latex_to_mathml(r"\text{ for all n }")

    def test_upright_identifier(self) -> None:
        html = latex_to_mathml(r"\int f \, \mathrm{d}x")

        assert "<mi>d</mi><mi>x</mi>" in html
        assert "mathrm" not in html.split("<annotation")[0]

    def test_operatorname(self) -> None:
        assert "<mi>sin</mi><mi>x</mi>" in latex_to_mathml(r"\operatorname{sin} x")

    def test_square_root(self) -> None:
        html = latex_to_mathml(r"\sqrt{x}")
        assert "<mrow><mo>√</mo><mrow><mi>x</mi></mrow></mrow>" in html

    def test_nth_root(self) -> None:
        html = latex_to_mathml(r"\sqrt[3]{x}")
        assert (
            "<mrow><msup><mrow></mrow><mrow><mn>3</mn></mrow></msup>"
            "<mo>√</mo><mrow><mi>x</mi></mrow></mrow>"
        ) in html

    def test_spacing_commands_dropped(self) -> None:
        html = latex_to_mathml(r"a \, b \quad c \! d")
        body = html.split("<annotation")[0]

        assert "quad" not in body
        assert "<mo>,</mo>" not in body
        assert "<mo>!</mo>" not in body
        assert "<mi>c</mi>" in body

    def test_commands_survive_sanitizer(self) -> None:
        html = latex_to_mathml(r"\left( \sqrt[3]{\frac{a}{b}} + \text{ok} \right)")
        assert sanitize_html(html) == html
