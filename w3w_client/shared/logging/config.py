"""ロギング設定"""
import logging
import sys
from typing import Iterable, Optional, TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MASK = "********"

# ログ出力を抑えるサードパーティのロガー
QUIET_LOGGERS = ("urllib3", "requests")

_logger_configured = False


class SecretMaskingFilter(logging.Filter):
    """登録された秘密情報（APIキーなど）をログメッセージから伏せ字にする"""

    def __init__(self, secrets: Iterable[Optional[str]] = ()) -> None:
        super().__init__()
        self.secrets = {secret for secret in secrets if secret and secret.strip()}

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True

        message = record.getMessage()
        masked = message
        for secret in self.secrets:
            masked = masked.replace(secret, MASK)

        if masked != message:
            record.msg = masked
            record.args = None
        return True


def setup_logging(
    level: str = "INFO",
    force: bool = False,
    secrets: Iterable[Optional[str]] = (),
    stream: Optional[TextIO] = None,
) -> None:
    """
    ルートロガーを設定

    標準出力はCLIのJSON出力に使うため、ログは標準エラーに出す。

    Args:
        level: ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        force: 設定済みでも再設定するか
        secrets: ログに出さない文字列（APIキーなど）
        stream: 出力先（Noneの場合は標準エラー）
    """
    global _logger_configured

    if _logger_configured and not force:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(SecretMaskingFilter(secrets))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logger_configured = True
    logging.debug(f"Logging configured with level: {level}")


def get_logger(name: str) -> logging.Logger:
    """
    指定名のロガーを取得

    Args:
        name: ロガー名（通常は__name__を指定）
    """
    return logging.getLogger(name)
