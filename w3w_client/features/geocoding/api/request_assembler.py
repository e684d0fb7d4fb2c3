"""リクエストの組み立て

オペレーション・必須パラメータ・オプションから RequestDescriptor を生成する。
送信は Transport に委譲する。
"""
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from ....shared.exceptions.errors import ConfigurationError, EncodingError
from ....shared.logging.config import get_logger
from ..domain.enums import Operation

logger = get_logger(__name__)

DEFAULT_HOST = "https://api.what3words.com/v3"
API_KEY_HEADER = "X-Api-Key"


class OptionsBuilder(Protocol):
    """apply_to() でパラメータを追加できるオプション"""

    def apply_to(self, params: dict[str, str]) -> dict[str, str]:
        ...


@dataclass(frozen=True)
class ClientConfig:
    """クライアントの不変な設定（APIキーとホスト）"""

    api_key: str
    host: str = DEFAULT_HOST

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_key.strip():
            raise ConfigurationError("what3words API key is not set")
        object.__setattr__(self, "host", self.host.rstrip("/"))

    def __repr__(self) -> str:
        # APIキーをログに出さない
        return f"ClientConfig(host={self.host!r})"


@dataclass(frozen=True)
class RequestDescriptor:
    """送信可能なリクエストの記述"""

    operation: Operation
    url: str
    params: tuple[tuple[str, str], ...]
    headers: dict[str, str] = field(default_factory=dict, compare=False)

    @property
    def path(self) -> str:
        return self.operation.path

    def params_dict(self) -> dict[str, str]:
        """クエリパラメータを辞書で返す（順序は維持）"""
        return dict(self.params)

    def __repr__(self) -> str:
        # ヘッダー（APIキー）は出力しない
        return f"RequestDescriptor(operation={self.operation.value!r}, params={self.params!r})"


def _require(name: str, value: Any) -> str:
    """必須パラメータが空でないことを確認"""
    if value is None:
        raise EncodingError(f"Required parameter '{name}' is missing")
    text = str(value)
    if not text.strip():
        raise EncodingError(f"Required parameter '{name}' must not be empty")
    return text


def build_request(
    config: ClientConfig,
    operation: Operation,
    required: Optional[dict[str, Any]] = None,
    options: Optional[OptionsBuilder] = None,
) -> RequestDescriptor:
    """
    リクエストを組み立てる

    Args:
        config: クライアント設定（APIキー・ホスト）
        operation: オペレーション
        required: 必須パラメータ（指定順に先頭へ並ぶ）
        options: オプション（apply_to() で残りのパラメータを追加）

    Returns:
        RequestDescriptor: リクエスト記述

    Raises:
        EncodingError: 必須パラメータが空、またはオプションのエンコードに失敗した場合
    """
    params: dict[str, str] = {}
    for name, value in (required or {}).items():
        params[name] = _require(name, value)

    if options is not None:
        # 必須パラメータはオプションで上書きさせない
        optional_params = options.apply_to({})
        for name, value in optional_params.items():
            if name not in params:
                params[name] = value

    request = RequestDescriptor(
        operation=operation,
        url=f"{config.host}/{operation.path}",
        params=tuple(params.items()),
        headers={API_KEY_HEADER: config.api_key},
    )
    logger.debug(f"Built request: {request!r}")
    return request
