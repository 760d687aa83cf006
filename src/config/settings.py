# 同步流程的預設配置 (可用 .env 或環境變數覆寫)

import os
from dataclasses import dataclass

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

DEFAULT_SOURCE_URL = (
    "https://raw.githubusercontent.com/DefiLlama/chainlist/refs/heads/main/constants/extraRpcs.js"
)
DEFAULT_EXPORT_NAME = "extraRpcs"
DEFAULT_OUTPUT_PATH = "rpc_providers.json"
DEFAULT_VERSION_PATH = "providers_version"
DEFAULT_USER_AGENT = "rpc-sync/0.1"


@dataclass(frozen=True)
class Settings:
    source_url: str = DEFAULT_SOURCE_URL
    export_name: str = DEFAULT_EXPORT_NAME
    output_path: str = DEFAULT_OUTPUT_PATH
    version_path: str = DEFAULT_VERSION_PATH
    fetch_timeout: float = 30.0
    probe_timeout: float = 5.0
    probe_concurrency: int = 10
    validate_timeout: float = 10.0
    validate_concurrency: int = 30
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"
    log_dir: str = "logs"


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip()


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError:
        _warn_invalid(name, raw, default)
        return default
    if value <= 0:
        _warn_invalid(name, raw, default)
        return default
    return value


def _warn_invalid(name: str, raw: str, default) -> None:
    logger.warning("Invalid value for {}: {!r}, using default {}", name, raw, default)


def load_settings() -> Settings:
    defaults = Settings()
    return Settings(
        source_url=_env_str("RPC_SYNC_SOURCE_URL", defaults.source_url),
        export_name=_env_str("RPC_SYNC_EXPORT_NAME", defaults.export_name),
        output_path=_env_str("RPC_SYNC_OUTPUT_PATH", defaults.output_path),
        version_path=_env_str("RPC_SYNC_VERSION_PATH", defaults.version_path),
        fetch_timeout=_env_number("RPC_SYNC_FETCH_TIMEOUT", defaults.fetch_timeout, float),
        probe_timeout=_env_number("RPC_SYNC_PROBE_TIMEOUT", defaults.probe_timeout, float),
        probe_concurrency=_env_number("RPC_SYNC_PROBE_CONCURRENCY", defaults.probe_concurrency, int),
        validate_timeout=_env_number("RPC_SYNC_VALIDATE_TIMEOUT", defaults.validate_timeout, float),
        validate_concurrency=_env_number(
            "RPC_SYNC_VALIDATE_CONCURRENCY", defaults.validate_concurrency, int
        ),
        user_agent=_env_str("RPC_SYNC_USER_AGENT", defaults.user_agent),
        log_level=_env_str("RPC_SYNC_LOG_LEVEL", defaults.log_level).upper() or defaults.log_level,
        log_dir=_env_str("RPC_SYNC_LOG_DIR", defaults.log_dir),
    )


settings = load_settings()
