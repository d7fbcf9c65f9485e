"""Formatting of operation parameters for the Typst math mode."""

from __future__ import annotations

import re
from math import isclose, pi, sqrt
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from qlayout.circuit.ops._base import Param

EPSILON = 1e-6
"""Absolute tolerance used when matching a float against a symbolic constant."""

#: Floats rendered as symbolic constants
SYMBOLIC_CONSTANTS: tuple[tuple[float, str], ...] = (
    (pi, "pi"),
    (-pi, "-pi"),
    (pi / 2, "pi/2"),
    (-pi / 2, "-pi/2"),
    (pi / 4, "pi/4"),
    (-pi / 4, "-pi/4"),
    (sqrt(2), "sqrt(2)"),
    (-sqrt(2), "-sqrt(2)"),
    (1 / sqrt(2), "1/sqrt(2)"),
    (-1 / sqrt(2), "-1/sqrt(2)"),
)

#: Typst symbols allowed unquoted in math mode, with their accepted variants
TYPST_SYMBOLS: dict[str, frozenset[str]] = {
    **{
        name: frozenset()
        for name in (
            "alpha",
            "beta",
            "gamma",
            "delta",
            "zeta",
            "eta",
            "iota",
            "lambda",
            "mu",
            "nu",
            "xi",
            "omicron",
            "tau",
            "upsilon",
            "chi",
            "psi",
            "omega",
            "Alpha",
            "Beta",
            "Gamma",
            "Delta",
            "Epsilon",
            "Zeta",
            "Eta",
            "Iota",
            "Kappa",
            "Lambda",
            "Mu",
            "Nu",
            "Xi",
            "Omicron",
            "Pi",
            "Rho",
            "Sigma",
            "Tau",
            "Upsilon",
            "Phi",
            "Chi",
            "Psi",
            "Omega",
            "dagger",
            "infinity",
        )
    },
    **{name: frozenset({"alt"}) for name in ("epsilon", "theta", "kappa", "pi", "rho", "sigma", "phi", "Theta")},
}

_IDENTIFIER = re.compile(r"[a-zA-Z][\w.]+")


def format_symbol(name: str) -> str:
    """Quote an identifier unless it is a Typst symbol.

    Args:
        name (str): Identifier, optionally with a `.variant` suffix.

    Returns:
        str: The identifier, or the identifier wrapped in double quotes.

    Examples:
        >>> format_symbol("theta")
        'theta'
        >>> format_symbol("phi.alt")
        'phi.alt'
        >>> format_symbol("angle_1")
        '"angle_1"'
    """
    main, _, variant = name.partition(".")
    variants = TYPST_SYMBOLS.get(main)
    if variants is not None and (not variant or variant in variants):
        return name
    return f'"{name}"'


def _strip_outer_parentheses(value: str) -> str:
    if not (value.startswith("(") and value.endswith(")")):
        return value

    depth = 1
    for char in value[1:-1]:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if depth == 0:
            # The opening parenthesis closes before the end, e.g. "(a)+(b)"
            break
    if depth != 0:
        return value[1:-1]
    return value


def format_param(value: Param) -> str:
    """Format a numeric or symbolic parameter.

    Args:
        value (Param): Float value or symbolic expression.

    Returns:
        str: Typst math representation.

    Examples:
        >>> from math import pi
        >>> format_param(pi / 2)
        'pi/2'
        >>> format_param(2.0)
        '2'
        >>> format_param(0.5)
        '0.5'
        >>> format_param(0.123)
        '0.12'
        >>> format_param("(theta*2)")
        'theta*2'
    """
    if isinstance(value, str):
        expression = _strip_outer_parentheses(value)
        return _IDENTIFIER.sub(lambda match: format_symbol(match.group(0)), expression)

    value = float(value)
    for constant, symbol in SYMBOLIC_CONSTANTS:
        if isclose(value, constant, rel_tol=0.0, abs_tol=EPSILON):
            return symbol
    if value.is_integer():
        return f"{value:.0f}"
    if (value * 10).is_integer():
        return f"{value:.1f}"
    return f"{value:.2f}"


def format_complex(value: complex) -> str:
    """Format a complex value as `re+imi`.

    Args:
        value (complex): Complex value.

    Returns:
        str: Typst math representation.

    Examples:
        >>> format_complex(1 + 0.5j)
        '1+0.5i'
    """
    value = complex(value)
    return f"{format_param(value.real)}+{format_param(value.imag)}i"


def format_matrix(matrix: ArrayLike) -> str:
    """Format a real or complex matrix row by row.

    Args:
        matrix (ArrayLike): Two dimensional array.

    Returns:
        str: Rows joined with `;`, entries joined with `,`.
    """
    array = np.atleast_2d(np.asarray(matrix))
    is_complex = np.iscomplexobj(array)
    rows = []
    for row in array:
        if is_complex:
            rows.append(",".join(format_complex(entry) for entry in row))
        else:
            rows.append(",".join(format_param(float(entry)) for entry in row))
    return ";".join(rows)
