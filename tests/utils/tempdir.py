from contextlib import contextmanager
from pathlib import Path
import shutil
import uuid


@contextmanager
def managed_temp_dir(prefix: str, root: str = "tests/tmp", files: dict[str, str] | None = None):
    """Yield a fresh directory under ``root``, optionally seeded with text files."""
    tmp_path = Path(root) / f"{prefix}_{uuid.uuid4().hex}"
    tmp_path.mkdir(parents=True, exist_ok=True)
    for name, content in (files or {}).items():
        target = tmp_path / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    try:
        yield tmp_path
    finally:
        shutil.rmtree(tmp_path, ignore_errors=True)
