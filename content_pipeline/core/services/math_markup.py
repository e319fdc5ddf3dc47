"""
LaTeX to MathML conversion for math nodes.

Covers the subset the editor produces for inline and block formulas:
identifiers, numbers, operators, groups, superscripts, subscripts, fractions,
roots, \\left/\\right delimiters, text runs (\\text, \\mathrm, ...) and common
symbol commands. Spacing and sizing commands are dropped. Output uses only the
MathML elements the sanitizer allows (math, semantics, mrow, mi, mo, mn, msup,
msub, mfrac, annotation).
Never raises; unknown commands render as identifiers.
"""

from __future__ import annotations

import html
import re

MATHML_NS = "http://www.w3.org/1998/Math/MathML"

TEXT_COMMANDS = (
    "textrm",
    "textit",
    "textbf",
    "text",
    "mathrm",
    "mathit",
    "mathbf",
    "operatorname",
)

# Text commands are one token so the spaces inside their argument survive.
TOKEN_PATTERN = re.compile(
    r"\\(?:" + "|".join(TEXT_COMMANDS) + r")\s*\{[^{}]*\}"
    r"|\\[A-Za-z]+|\\.|\d+(?:\.\d+)?|[A-Za-z]|\S"
)
TEXT_COMMAND_PATTERN = re.compile(r"^\\[A-Za-z]+\s*\{([^{}]*)\}$")

# Sizing and spacing commands produce no visible output.
SILENT_COMMANDS = frozenset(
    [",", ";", ":", "!", " ", "quad", "qquad", "displaystyle", "big", "Big", "bigg", "Bigg"]
)

EMPTY_ROW = "<mrow></mrow>"

SYMBOL_IDENTIFIERS: dict[str, str] = {
    "alpha": "α",
    "beta": "β",
    "gamma": "γ",
    "delta": "δ",
    "epsilon": "ε",
    "theta": "θ",
    "lambda": "λ",
    "mu": "μ",
    "pi": "π",
    "sigma": "σ",
    "phi": "φ",
    "omega": "ω",
    "Delta": "Δ",
    "Sigma": "Σ",
    "Omega": "Ω",
    "infty": "∞",
}

SYMBOL_OPERATORS: dict[str, str] = {
    "cdot": "⋅",
    "times": "×",
    "div": "÷",
    "pm": "±",
    "leq": "≤",
    "le": "≤",
    "geq": "≥",
    "ge": "≥",
    "neq": "≠",
    "approx": "≈",
    "sum": "∑",
    "prod": "∏",
    "int": "∫",
    "to": "→",
    "rightarrow": "→",
}


def _tokenize(latex: str) -> list[str]:
    return TOKEN_PATTERN.findall(latex)


class _MathParser:
    def __init__(self, tokens: list[str]) -> None:
        self._tokens = tokens
        self._pos = 0

    def _peek(self) -> str | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _next(self) -> str | None:
        token = self._peek()
        if token is not None:
            self._pos += 1
        return token

    def parse_row(self, closing: str | None = None) -> str:
        parts: list[str] = []
        while True:
            token = self._peek()
            if token is None:
                break
            if token == closing:
                self._pos += 1
                break
            if token == "}":
                # stray closing brace
                self._pos += 1
                continue
            parts.append(self._parse_scripts())
        return "".join(parts)

    def _parse_scripts(self) -> str:
        base = self._parse_atom()
        while self._peek() in ("^", "_"):
            op = self._next()
            script = self._parse_atom()
            tag = "msup" if op == "^" else "msub"
            base = f"<{tag}>{base}{script}</{tag}>"
        return base

    def _parse_delimiter(self) -> str:
        """Delimiter after \\left or \\right; "." is the empty delimiter."""
        if self._peek() == ".":
            self._pos += 1
            return EMPTY_ROW
        return self._parse_atom()

    def _parse_sqrt(self) -> str:
        """Radical as a root sign before its argument, with an optional [index]."""
        index = ""
        if self._peek() == "[":
            self._pos += 1
            index = f"<msup>{EMPTY_ROW}<mrow>{self.parse_row(']')}</mrow></msup>"
        return f"<mrow>{index}<mo>√</mo>{self._parse_atom()}</mrow>"

    def _parse_atom(self) -> str:
        token = self._next()
        if token is None:
            return EMPTY_ROW
        if token == "{":
            return f"<mrow>{self.parse_row('}')}</mrow>"
        if token.startswith("\\") and len(token) > 1:
            text_match = TEXT_COMMAND_PATTERN.match(token)
            if text_match:
                text = text_match.group(1).strip()
                return f"<mi>{html.escape(text)}</mi>" if text else EMPTY_ROW
            name = token[1:]
            if name in SILENT_COMMANDS:
                return EMPTY_ROW
            if name in ("left", "right"):
                return self._parse_delimiter()
            if name == "sqrt":
                return self._parse_sqrt()
            if name == "frac":
                numerator = self._parse_atom()
                denominator = self._parse_atom()
                return f"<mfrac>{numerator}{denominator}</mfrac>"
            if name in SYMBOL_IDENTIFIERS:
                return f"<mi>{SYMBOL_IDENTIFIERS[name]}</mi>"
            if name in SYMBOL_OPERATORS:
                return f"<mo>{SYMBOL_OPERATORS[name]}</mo>"
            if not name.isalpha():
                return f"<mo>{html.escape(name)}</mo>"
            return f"<mi>{html.escape(name)}</mi>"
        if token[0].isdigit():
            return f"<mn>{token}</mn>"
        if token.isalpha():
            return f"<mi>{token}</mi>"
        return f"<mo>{html.escape(token)}</mo>"


def latex_to_mathml(latex: str, display: bool = False) -> str:
    """Convert a LaTeX formula to a MathML fragment with a TeX annotation."""
    body = _MathParser(_tokenize(latex)).parse_row()
    display_attr = ' class="math-display"' if display else ""
    return (
        f'<math xmlns="{MATHML_NS}"{display_attr}>'
        f"<semantics><mrow>{body}</mrow>"
        f'<annotation encoding="application/x-tex">{html.escape(latex)}</annotation>'
        f"</semantics></math>"
    )
