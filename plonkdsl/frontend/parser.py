"""
Text parser: source text -> typed parse nodes.

Example:
    >>> nodes = parse_program("a*b + a = c")
    >>> nodes[0].terms[0].is_quadratic
    True
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional, Union

import lark
from lark import Transformer, v_args

from ..errors import ParseError
from .grammar import build_parser
from .nodes import (
    CoefficientNode,
    EquationNode,
    PublicNode,
    TermNode,
    VariableNode,
)

logger = logging.getLogger(__name__)


def _is_negative(sign: Optional[lark.Token]) -> bool:
    return sign is not None and str(sign) == "-"


class EquationTransformer(Transformer):
    """Turns the lark tree into EquationNode values."""

    def _term_parts(self, children):
        coefficient = None
        if children[0].type == "COEFF":
            coefficient = CoefficientNode(str(children[0]))
            children = children[1:]
        return coefficient, tuple(VariableNode(str(var)) for var in children)

    def quadratic(self, children):
        return self._term_parts(children)

    def linear(self, children):
        return self._term_parts(children)

    def lhs(self, children):
        terms = []
        for sign, (coefficient, variables) in zip(children[::2], children[1::2]):
            terms.append(TermNode(_is_negative(sign), coefficient, variables))
        return tuple(terms)

    def public(self, children):
        sign, var = children
        return PublicNode(_is_negative(sign), VariableNode(str(var)))

    def no_public(self, _):
        return None

    @v_args(meta=True)
    def equation(self, meta, children):
        terms, public = children
        return EquationNode(terms=terms, public=public, line=meta.line)

    def program(self, children):
        return list(children)


def parse_program(text: str) -> List[EquationNode]:
    """
    Parse source text into one EquationNode per equation.

    Raises:
        ParseError: If the text does not match the grammar
    """
    try:
        tree = build_parser().parse(text)
    except lark.exceptions.UnexpectedInput as exc:
        line = exc.line if isinstance(exc.line, int) and exc.line > 0 else None
        column = exc.column if isinstance(exc.column, int) and exc.column > 0 else None
        context = exc.get_context(text) if line is not None else ""
        raise ParseError(_describe(exc), line=line, column=column, context=context) from exc

    equations = EquationTransformer().transform(tree)
    logger.debug("parsed %d equation(s)", len(equations))
    return equations


def parse_file(path: Union[str, Path]) -> List[EquationNode]:
    """
    Read a source file (UTF-8) and parse it.

    Raises:
        ParseError: The file is not valid UTF-8 or does not match the grammar
        OSError: The file cannot be read
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(
            f"{path} is not valid UTF-8 (byte {exc.start}: {exc.reason})"
        ) from exc
    return parse_program(text)


def _describe(exc: lark.exceptions.UnexpectedInput) -> str:
    if isinstance(exc, lark.exceptions.UnexpectedCharacters):
        return f"unexpected character {exc.char!r}"
    if isinstance(exc, lark.exceptions.UnexpectedToken):
        if exc.token.type == "$END":
            return "unexpected end of input"
        return f"unexpected token {str(exc.token)!r}"
    return "unexpected end of input"
