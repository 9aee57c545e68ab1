import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'buildlens' and tests/ as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from helpers.cache_utils import reset_buildlens_caches
from helpers.workspace import WorkspaceFactory


@pytest.fixture(autouse=True)
def _isolate_buildlens(tmp_path_factory, monkeypatch):
    """Fresh caches and a private user config dir for every test.

    Developer shells may carry ``BUILDLENS_*`` overrides; they are removed so
    configuration always starts from the bundled defaults.
    """
    for key in list(os.environ):
        if key.startswith("BUILDLENS_"):
            monkeypatch.delenv(key, raising=False)
    user_dir = tmp_path_factory.mktemp("user-config")
    monkeypatch.setenv("BUILDLENS_USER_CONFIG_DIR", str(user_dir))

    reset_buildlens_caches()
    yield
    reset_buildlens_caches()


@pytest.fixture
def user_config_dir() -> Path:
    return Path(os.environ["BUILDLENS_USER_CONFIG_DIR"])


@pytest.fixture
def workspaces(tmp_path) -> WorkspaceFactory:
    """Factory for throwaway Bazel workspaces under ``tmp_path``."""
    return WorkspaceFactory(tmp_path)
