"""Test formatting of operation parameters."""

from math import pi, sqrt

import numpy as np
import pytest

from qlayout.formatting import format_complex, format_matrix, format_param, format_symbol


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (pi, "pi"),
        (-pi / 2, "-pi/2"),
        (pi / 4 + 1e-8, "pi/4"),
        (sqrt(2), "sqrt(2)"),
        (-1 / sqrt(2), "-1/sqrt(2)"),
        (2.0, "2"),
        (-3, "-3"),
        (0.0, "0"),
        (2.5, "2.5"),
        (1.25, "1.25"),
        (0.123, "0.12"),
        (np.float64(0.5), "0.5"),
    ],
)
def test_format_float(value, expected):
    assert format_param(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("theta", "theta"),
        ("(theta*2)", "theta*2"),
        ("(a)+(b)", "(a)+(b)"),
        ("2*phi.alt", "2*phi.alt"),
        ("angle_1 + x", '"angle_1" + x'),
        ("pi.foo", '"pi.foo"'),
    ],
)
def test_format_symbolic(value, expected):
    assert format_param(value) == expected


def test_format_symbol():
    assert format_symbol("alpha") == "alpha"
    assert format_symbol("epsilon.alt") == "epsilon.alt"
    assert format_symbol("alpha.alt") == '"alpha.alt"'
    assert format_symbol("readout") == '"readout"'


def test_format_complex():
    assert format_complex(1 + 0.5j) == "1+0.5i"
    assert format_complex(0) == "0+0i"
    assert format_complex(pi * 1j) == "0+pii"


def test_format_matrix():
    assert format_matrix([[1, 0], [0, 1]]) == "1,0;0,1"
    assert format_matrix(np.array([[1 + 1j, 0], [0, 1j]])) == "1+1i,0+0i;0+0i,0+1i"
    assert format_matrix([0.5, 2]) == "0.5,2"
