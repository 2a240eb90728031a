import sys
from pathlib import Path

import pytest

# Ensure the repo root is on sys.path for absolute imports.
REPO_ROOT = Path(__file__).resolve().parents[1]
repo_root_str = str(REPO_ROOT)
if repo_root_str not in sys.path:
    sys.path.insert(0, repo_root_str)


def make_project(root: Path, files) -> Path:
    """Create ``files`` (relative paths) under ``root`` with small contents."""
    for rel in files:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"// {rel}\n", encoding="utf-8")
    return root


@pytest.fixture
def project(tmp_path: Path):
    def _make(*files):
        return make_project(tmp_path / "project", files)

    return _make


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("CODESLIDES_MAX_DEPTH", "CODESLIDES_TEMPLATE_DIR", "CODESLIDES_IGNORE", "CODESLIDES_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
