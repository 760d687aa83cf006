import json
import os
import tempfile
from pathlib import Path

from src.config.logger_config import logger
from src.rpc_sync.domain.errors import ParseError
from src.rpc_sync.domain.models import Catalog


def _default_file_mode() -> int:
    # mkstemp creates 0600 files; published files follow the umask like open() does
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class JsonCatalogSink:
    def __init__(self, output_path: str | Path) -> None:
        self.output_path = Path(output_path)

    def write_catalog(self, catalog: Catalog) -> Path:
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(catalog, ensure_ascii=False, indent=2) + "\n"
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.output_path.name}.",
            suffix=".tmp",
            dir=self.output_path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.chmod(tmp_name, _default_file_mode())
            os.replace(tmp_name, self.output_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.info("Catalog written: output_path={}", str(self.output_path))
        return self.output_path

    def read_catalog(self) -> Catalog:
        try:
            data = json.loads(self.output_path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise ParseError(f"Catalog file not found: {self.output_path}") from exc
        except (OSError, ValueError) as exc:
            raise ParseError(f"Catalog file is not valid JSON: {self.output_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ParseError(f"Catalog file is not a JSON object: {self.output_path}")
        catalog: Catalog = {}
        for network_id, urls in data.items():
            if not isinstance(urls, list) or not all(isinstance(url, str) for url in urls):
                raise ParseError(f"Catalog entry {network_id!r} is not a list of URLs")
            catalog[network_id] = list(urls)
        return catalog
