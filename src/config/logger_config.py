import sys
from pathlib import Path

from loguru import logger

from src.config.settings import settings

logger.remove()
logger.add(
    sys.stderr,
    level=settings.log_level,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
)

if settings.log_dir:
    log_file = Path(settings.log_dir) / "rpc_sync_{time}.log"
    logger.add(
        log_file,
        rotation="256 MB",  # 每個檔案滿 256MB 就切分
        retention="10 days",  # 只保留最近 10 天的日誌
        compression="zip",  # 切分後的舊檔案自動壓縮成 zip
        encoding="utf-8",
        level="DEBUG",  # 檔案保留完整的探測細節
        enqueue=True,
    )
