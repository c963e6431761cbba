import random
import sys
from pathlib import Path

import pytest

# Make the src/ layout importable when running the suite from a checkout.
repo_root = Path(__file__).resolve().parents[1]
src_dir = repo_root / "src"
if src_dir.exists() and str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))


@pytest.fixture
def rng():
    """Deterministic random source; same seed, same draws."""
    return random.Random(20070101)


@pytest.fixture
def settings_home(tmp_path, monkeypatch):
    # Ensure settings write to a temp location by overriding platform env vars
    monkeypatch.setenv("APPDATA", str(tmp_path))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in ("DIGEST", "HASH_FORMAT", "SALT_LENGTH", "SALT_PLACEMENT",
                "PASSWORD_LENGTH", "STRENGTH_LEVEL", "RANDOM_SOURCE"):
        monkeypatch.delenv("POG_" + key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
