"""what3words API 用の HTTP Transport（requests + urllib3 Retry）"""

from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ...features.geocoding.api.error_classifier import classify_transport_failure
from ...features.geocoding.api.request_assembler import RequestDescriptor
from ...features.geocoding.api.transport import RawResponse
from ..logging.config import get_logger

logger = get_logger(__name__)

DEFAULT_USER_AGENT = "w3w-client-python/1.0"

# what3words API は GET のみ。5xx とレート制限はリトライする
RETRY_METHODS = frozenset(["GET"])
RETRY_STATUSES = (429, 500, 502, 503, 504)


def build_retry(max_retries: int, backoff_factor: float, status_forcelist: tuple[int, ...]) -> Retry:
    """
    リトライ設定を生成

    リトライを使い切った場合も最後のレスポンスをそのまま返す（raise_on_status=False）。
    ステータスの解釈はレスポンスデコーダーに任せる。
    """
    return Retry(
        total=max_retries,
        connect=max_retries,
        read=max_retries,
        status=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=status_forcelist,
        allowed_methods=RETRY_METHODS,
        respect_retry_after_header=True,
        raise_on_status=False,
    )


class HTTPClient:
    """
    RequestDescriptor を送信して RawResponse を返す Transport

    Features:
    - 接続エラー・5xx・429 の自動リトライ（指数バックオフ）
    - タイムアウト設定
    - セッション（コネクション）の再利用

    HTTPステータスでは例外を送出しない。
    """

    def __init__(
        self,
        timeout: float = 10,
        max_retries: int = 3,
        backoff_factor: float = 0.5,
        status_forcelist: tuple[int, ...] = RETRY_STATUSES,
        user_agent: Optional[str] = None,
    ):
        """
        Args:
            timeout: リクエストタイムアウト（秒）
            max_retries: 最大リトライ回数
            backoff_factor: バックオフ係数
            status_forcelist: リトライ対象のステータスコード
            user_agent: User-Agentヘッダー
        """
        self.timeout = timeout
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.retry = build_retry(max_retries, backoff_factor, status_forcelist)
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        session = requests.Session()

        adapter = HTTPAdapter(max_retries=self.retry)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update(
            {
                "User-Agent": self.user_agent,
                "Accept": "application/json",
            }
        )
        return session

    def send(self, request: RequestDescriptor) -> RawResponse:
        """
        リクエストを送信

        Args:
            request: 送信するリクエスト（URL・クエリパラメータ・ヘッダー）

        Returns:
            RawResponse: ステータスコードとボディ（ステータスに関わらず返す）

        Raises:
            TransportError: 接続失敗・タイムアウトなどでレスポンスが得られない場合
        """
        logger.debug(f"Sending {request.operation.value} request to {request.url}")
        try:
            response = self.session.get(
                request.url,
                params=list(request.params),
                headers=request.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise classify_transport_failure(e, request.url) from e

        logger.debug(
            f"{request.operation.value} responded with status={response.status_code} "
            f"({len(response.content)} bytes)"
        )
        return RawResponse(
            status_code=response.status_code,
            body=response.content,
            url=response.url,
        )

    def close(self) -> None:
        """セッションをクローズ"""
        self.session.close()
        logger.debug("HTTP session closed")

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
