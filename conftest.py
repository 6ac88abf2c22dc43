# Ensure `import oceanforge` works from a fresh clone without a prior install:
# put repo/python on sys.path before test collection.
import sys
from pathlib import Path


def _repo_root() -> Path:
    return Path(__file__).resolve().parent


def _ensure_python_path() -> None:
    pkg_dir = _repo_root() / "python"
    if str(pkg_dir) not in sys.path:
        sys.path.insert(0, str(pkg_dir))


_ensure_python_path()
