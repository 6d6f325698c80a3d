"""Shared test fixtures for epitab."""

import pandas as pd
import pytest


@pytest.fixture
def linelist():
    """Ten-case line list with a few missing values."""
    return pd.DataFrame({
        "sex": ["M", "F", "M", "F", "M", None, "F", "M", "F", "M"],
        "outcome": [
            "Died", "Recovered", "Recovered", None, "Died",
            "Recovered", "Recovered", "Died", "Recovered", "Recovered",
        ],
        "age": [3, 25, 47, 61, 8, 33, 72, 15, 50, 29],
        "admitted": [True, False, True, True, None, False, True, False, False, True],
    })


@pytest.fixture
def ab_df():
    """Counter {A: 6, B: 4}, no missing values."""
    return pd.DataFrame({"case": ["A"] * 6 + ["B"] * 4})


@pytest.fixture
def ab_xy_df():
    """A and B by X and Y, with no A x Y combination."""
    return pd.DataFrame({
        "case": ["A"] * 5 + ["B"] * 5 + ["B"] * 5,
        "site": ["X"] * 5 + ["X"] * 5 + ["Y"] * 5,
    })
