"""pytest configuration file for the layout tests."""

import matplotlib as mpl
import pytest


def pytest_configure(config: pytest.Config):
    # Draw figures without a display.
    mpl.use("Agg")
    config.addinivalue_line("markers", "figure: mark tests that draw matplotlib figures")
