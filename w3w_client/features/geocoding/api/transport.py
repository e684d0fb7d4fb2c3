"""Transport（送信処理）のインターフェース"""
from dataclasses import dataclass
from typing import Optional, Protocol

from .request_assembler import RequestDescriptor


@dataclass(frozen=True)
class RawResponse:
    """Transport から返る未加工のレスポンス"""

    status_code: int
    body: bytes
    url: Optional[str] = None

    @property
    def ok(self) -> bool:
        """2xx かどうか"""
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """
    RequestDescriptor を送信して RawResponse を返す

    接続失敗・タイムアウトの場合は TransportError を送出する。
    HTTPステータスによる例外は送出しない。
    """

    def send(self, request: RequestDescriptor) -> RawResponse:
        ...

    def close(self) -> None:
        ...
