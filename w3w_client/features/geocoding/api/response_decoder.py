"""レスポンスのデコード

成功以外のステータスはボディを解釈せずに ServiceError とする。
成功時は呼び出し側が要求した形（ResponseShape）にデコードする。
JSON / GeoJSON のどちらの形式かはボディから判別する。
"""
import json
import math
from typing import Any, Callable

from ....shared.exceptions.errors import EncodingError
from ....shared.logging.config import get_logger
from ..domain.enums import Operation, ResponseShape
from ..domain.responses import (
    AutosuggestResult,
    AvailableLanguages,
    GridSection,
    ThreeWordAddress,
    is_geojson,
)
from .error_classifier import classify_decode_failure, classify_status
from .transport import RawResponse

logger = get_logger(__name__)

# FULL でデコードするモデル
FULL_DECODERS: dict[Operation, Callable[[Any], Any]] = {
    Operation.CONVERT_TO_3WA: ThreeWordAddress.from_payload,
    Operation.CONVERT_TO_COORDINATES: ThreeWordAddress.from_payload,
    Operation.AUTOSUGGEST: AutosuggestResult.from_payload,
    Operation.GRID_SECTION: GridSection.from_payload,
    Operation.AVAILABLE_LANGUAGES: AvailableLanguages.from_payload,
}


def parse_json(raw: RawResponse) -> Any:
    """ボディをJSONとしてパース（スキーマは仮定しない）"""
    try:
        return json.loads(raw.body)
    except (ValueError, UnicodeDecodeError) as e:
        raise classify_decode_failure(raw, f"invalid JSON: {e}") from e


def extract_words(data: Any) -> str:
    """
    3単語アドレスを取り出す

    - JSON: {"words": "..."}
    - GeoJSON: features[0].properties.words
    """
    if is_geojson(data):
        features = data["features"]
        if not features or not isinstance(features[0], dict):
            raise ValueError("GeoJSON FeatureCollection has no features")
        properties = features[0].get("properties")
        words = properties.get("words") if isinstance(properties, dict) else None
    elif isinstance(data, dict):
        words = data.get("words")
    else:
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    if words is None:
        raise ValueError("'words' field is missing")
    if not isinstance(words, str):
        raise ValueError(f"'words' must be a string, got {type(words).__name__}")
    return words


def _finite_number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{name}' must be a number, got {type(value).__name__}")
    try:
        number = float(value)
    except OverflowError:
        raise ValueError(f"'{name}' is out of range: {value!r}")
    if not math.isfinite(number):
        raise ValueError(f"'{name}' must be finite, got {value!r}")
    return number


def extract_coordinates(data: Any) -> tuple[float, float]:
    """
    (緯度, 経度) を取り出す

    - JSON: {"coordinates": {"lat": ..., "lng": ...}}
    - GeoJSON: features[0].geometry.coordinates = [経度, 緯度]
    """
    if is_geojson(data):
        features = data["features"]
        if not features or not isinstance(features[0], dict):
            raise ValueError("GeoJSON FeatureCollection has no features")
        geometry = features[0].get("geometry")
        position = geometry.get("coordinates") if isinstance(geometry, dict) else None
        if not isinstance(position, list) or len(position) < 2:
            raise ValueError("GeoJSON point coordinates are missing")
        return _finite_number(position[1], "lat"), _finite_number(position[0], "lng")

    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    coordinates = data.get("coordinates")
    if not isinstance(coordinates, dict):
        raise ValueError("'coordinates' field is missing")
    if "lat" not in coordinates or "lng" not in coordinates:
        raise ValueError("'coordinates.lat' or 'coordinates.lng' is missing")
    return (
        _finite_number(coordinates["lat"], "lat"),
        _finite_number(coordinates["lng"], "lng"),
    )


def decode_response(raw: RawResponse, shape: ResponseShape, operation: Operation) -> Any:
    """
    RawResponse を要求された形にデコード

    Args:
        raw: Transport から返されたレスポンス
        shape: デコード結果の形
        operation: 送信したオペレーション

    Returns:
        FULL: レスポンスモデル / RAW_JSON: パース済みJSON /
        WORDS: 3単語アドレス文字列 / COORDINATES: (緯度, 経度)

    Raises:
        ServiceError: 成功以外のステータス
        DecodeError: ボディを要求された形にデコードできない
    """
    if not raw.ok:
        raise classify_status(raw)

    shape = ResponseShape(shape)
    data = parse_json(raw)

    if shape is ResponseShape.RAW_JSON:
        return data

    try:
        if shape is ResponseShape.WORDS:
            return extract_words(data)
        if shape is ResponseShape.COORDINATES:
            return extract_coordinates(data)
        return FULL_DECODERS[operation](data)
    except (
        KeyError, IndexError, TypeError, ValueError, OverflowError, EncodingError
    ) as e:
        raise classify_decode_failure(
            raw, f"{operation.value} response does not match {shape.value}: {e!r}"
        ) from e
