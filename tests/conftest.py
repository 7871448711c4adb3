import random
import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Ensure the project root is importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = str(Path(__file__).resolve().parent.parent)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

SAMPLE_DOT = '''digraph G {
    "main" [label="bin_demo::main"];
    "run" [label="lib_base::Runner::run"];
    "helper" [label="lib_trait::helper"];
    "main" -> "run";
    "run" -> "helper";
    "main" -> "missing";
}
'''


@pytest.fixture
def sample_dot():
    return SAMPLE_DOT


@pytest.fixture
def rng():
    return random.Random(1234)
