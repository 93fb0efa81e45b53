import sys
from pathlib import Path

import pytest

# (1) Add src/ and tests/ to sys.path so tests run without an editable install
#     and can import the shared sample types from tests/samples.py.
ROOT = Path(__file__).resolve().parents[1]
for path in (ROOT / "src", ROOT / "tests"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import specval.engine.engine as engine_mod  # noqa: E402


@pytest.fixture(autouse=True)
def _restore_default_engine():
    """
    @brief
    Keeps the process-wide default engine isolated between tests.

    @details
    Tests calling configure() or configure_from_file() replace the module
    level default engine; it is restored after each test.
    """
    saved = engine_mod._default_engine
    yield
    engine_mod._default_engine = saved
