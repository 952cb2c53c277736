"""Shared fixtures: the sample graph (as adjacency map and as Graph) and a
Flask test client with a fresh session per test."""
from __future__ import annotations

import copy

import pytest

from graph import DEFAULT_ADJACENCY, Graph


# ---------------------------------------------------------------------------
# Graph fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_adjacency() -> dict:
    """A:{B:2,C:1,D:4} … G:{} — the graph the editor opens with."""
    return copy.deepcopy(DEFAULT_ADJACENCY)


@pytest.fixture
def sample_graph() -> Graph:
    return Graph.default()


@pytest.fixture
def tie_adjacency() -> dict:
    """S reaches T through A (light) or B (heavy); A and B tie at distance 1."""
    return {"S": {"A": 1, "B": 1}, "A": {"T": 1}, "B": {"T": 5}, "T": {}}


@pytest.fixture
def cyclic_adjacency() -> dict:
    """A positive cycle A <-> B reachable from A, with an exit to C."""
    return {"A": {"B": 1}, "B": {"A": 1, "C": 1}, "C": {}}


# ---------------------------------------------------------------------------
# Flask fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def app():
    from main import app as flask_app

    flask_app.config.update(TESTING=True, SECRET_KEY="test-secret")
    flask_app.extensions["run_cache"].clear()
    yield flask_app
    flask_app.extensions["run_cache"].clear()


@pytest.fixture
def client(app):
    return app.test_client()
