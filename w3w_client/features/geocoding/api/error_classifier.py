"""失敗したレスポンス・通信を型付きの例外に分類する"""
from ....shared.exceptions.errors import DecodeError, ServiceError, TransportError
from ....shared.logging.config import get_logger
from .transport import RawResponse

logger = get_logger(__name__)


def classify_status(raw: RawResponse) -> ServiceError:
    """
    成功以外のステータスを ServiceError に分類

    ステータスコードとボディはそのまま保持する。
    """
    error = ServiceError(
        f"what3words API returned status {raw.status_code}",
        status_code=raw.status_code,
        body=raw.body,
    )
    if error.error_code:
        error.args = (
            f"what3words API returned status {raw.status_code}: "
            f"{error.error_code} {error.error_message or ''}".rstrip(),
        )
    logger.warning(f"Service error: {error} (url={raw.url})")
    return error


def classify_decode_failure(raw: RawResponse, reason: str) -> DecodeError:
    """成功ステータスでも要求された形にデコードできなかった場合の DecodeError"""
    error = DecodeError(
        f"Failed to decode response: {reason}",
        status_code=raw.status_code,
        body=raw.body,
    )
    logger.warning(f"{error} (url={raw.url})")
    return error


def classify_transport_failure(exc: Exception, url: str) -> TransportError:
    """Transport の例外を TransportError に分類（連鎖は呼び出し側の raise ... from で行う）"""
    error = TransportError(f"Failed to reach {url}: {exc}")
    logger.error(str(error))
    return error
