"""カスタム例外定義"""
import json
from typing import Any, Optional


class W3WError(Exception):
    """what3wordsクライアント基底例外"""

    pass


class ConfigurationError(W3WError):
    """設定エラー"""

    pass


class EncodingError(W3WError):
    """ジオメトリ・オプションのエンコードエラー（送信前に発生）"""

    pass


class TransportError(W3WError):
    """通信エラー（接続失敗・タイムアウトなど、レスポンスなし）"""

    pass


class ResponseError(W3WError):
    """レスポンスを伴うエラーの基底クラス"""

    def __init__(self, message: str, status_code: int, body: bytes) -> None:
        """
        Args:
            message: エラーメッセージ
            status_code: HTTPステータスコード
            body: レスポンスボディ（未加工）
        """
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def text(self) -> str:
        """レスポンスボディを文字列として返す"""
        return self.body.decode("utf-8", errors="replace")


class ServiceError(ResponseError):
    """APIが成功以外のステータスを返した"""

    def __init__(self, message: str, status_code: int, body: bytes) -> None:
        super().__init__(message, status_code, body)
        error = _parse_error_payload(body)
        self.error_code: Optional[str] = error.get("code")
        self.error_message: Optional[str] = error.get("message")


class DecodeError(ResponseError):
    """レスポンスボディを要求された形式にデコードできない"""

    pass


def _parse_error_payload(body: bytes) -> dict[str, Any]:
    """
    エラーレスポンスから error オブジェクトを取り出す

    形式: {"error": {"code": "BadWords", "message": "..."}}
    解析できない場合は空の辞書を返す
    """
    try:
        payload = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return {}

    if not isinstance(payload, dict):
        return {}

    error = payload.get("error")
    if not isinstance(error, dict):
        return {}

    return {
        key: value
        for key, value in error.items()
        if key in ("code", "message") and isinstance(value, str)
    }
