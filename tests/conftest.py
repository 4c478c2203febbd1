import pytest
from graphpath.models import STATE

# -----------------------------
# Test Fixtures (seed deterministic state)
# -----------------------------

@pytest.fixture(autouse=True)
def reset_state():
    """Start every test from an empty workspace."""
    STATE["nodes"] = []
    STATE["edges"] = []
    STATE["start"] = ""
    STATE["end"] = ""
    STATE["events"] = []
    yield
    STATE["nodes"] = []
    STATE["edges"] = []
    STATE["start"] = ""
    STATE["end"] = ""
    STATE["events"] = []
