from pathlib import Path

from src.config.logger_config import logger
from src.rpc_sync.domain.errors import VersionReadError


def parse_version(text: str) -> int:
    value = text.strip()
    if not value:
        return 0
    try:
        version = int(value)
    except ValueError as exc:
        raise VersionReadError(f"Version file does not hold an integer: {value[:32]!r}") from exc
    if version < 0:
        raise VersionReadError(f"Version must not be negative: {version}")
    return version


class FileVersionStore:
    def __init__(self, version_path: str | Path) -> None:
        self.version_path = Path(version_path)

    def read(self) -> int:
        if not self.version_path.exists():
            return 0
        try:
            return parse_version(self.version_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read version file {}, starting from 0: {}", self.version_path, exc)
        except VersionReadError as exc:
            logger.warning("{}, starting from 0", exc)
        return 0

    def bump(self) -> tuple[int, int]:
        previous = self.read()
        current = previous + 1
        self.version_path.parent.mkdir(parents=True, exist_ok=True)
        self.version_path.write_text(str(current), encoding="utf-8")
        logger.info("Version updated: {} -> {}", previous, current)
        return previous, current
