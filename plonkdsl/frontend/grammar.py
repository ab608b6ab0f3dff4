"""
Grammar of the equation language.

A program is a list of equations, one per line (or separated by `;`):

    # comments run to the end of the line
    a*b + a = c
    3x*y - 2z = -out
    a + b + c = 0

Each left-hand side holds signed terms: `[coeff[*]] var * var` for a
quadratic term and `[coeff[*]] var` for a linear term. The right-hand side
names a single public input (optionally negated) or is `0` when the
equation has none.
"""

from functools import lru_cache

import lark

GRAMMAR = r"""
    program: _sep* (equation _sep+)* equation?

    _sep: _NL | ";"

    equation: lhs "=" rhs

    lhs: [SIGN] term (SIGN term)*

    ?term: quadratic
         | linear

    quadratic: VAR "*" VAR
             | COEFF "*"? VAR "*" VAR

    linear: VAR
          | COEFF "*"? VAR

    rhs: [SIGN] VAR   -> public
       | "0"          -> no_public

    SIGN: "+" | "-"
    COEFF: /[0-9]+/
    VAR: /[A-Za-z_][A-Za-z0-9_]*/
    COMMENT: /#[^\n]*/
    _NL: /\n+/

    %ignore /[ \t\f\r]+/
    %ignore COMMENT
"""


@lru_cache(maxsize=None)
def build_parser() -> lark.Lark:
    """Return the (shared) LALR parser for the equation language."""
    return lark.Lark(
        GRAMMAR,
        start="program",
        parser="lalr",
        propagate_positions=True,
        maybe_placeholders=True,
    )
