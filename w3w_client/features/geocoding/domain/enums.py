"""ジオコーディング機能のEnum定義"""
from enum import Enum
from typing import Union

from ....shared.exceptions.errors import EncodingError


class ResponseFormat(str, Enum):
    """レスポンス形式（format パラメータ）"""

    JSON = "json"
    GEOJSON = "geojson"

    @classmethod
    def from_value(cls, value: Union[str, "ResponseFormat"]) -> "ResponseFormat":
        """文字列またはEnumから取得（大文字小文字は区別しない）"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise EncodingError(
                f"Invalid format: {value!r} (expected 'json' or 'geojson')"
            )


class ResponseShape(str, Enum):
    """呼び出し側が要求するデコード結果の形"""

    FULL = "full"  # レスポンスモデル
    RAW_JSON = "raw_json"  # パース済みJSONそのまま
    WORDS = "words"  # 3単語アドレス文字列のみ
    COORDINATES = "coordinates"  # (緯度, 経度) のみ


class Operation(str, Enum):
    """APIオペレーション（値はエンドポイントのパス）"""

    CONVERT_TO_3WA = "convert-to-3wa"
    CONVERT_TO_COORDINATES = "convert-to-coordinates"
    AUTOSUGGEST = "autosuggest"
    GRID_SECTION = "grid-section"
    AVAILABLE_LANGUAGES = "available-languages"

    @property
    def path(self) -> str:
        """エンドポイントのパス"""
        return self.value

    @property
    def supports_geojson(self) -> bool:
        """GeoJSON形式のレスポンスに対応しているか"""
        return self in GEOJSON_OPERATIONS


class InputType(str, Enum):
    """autosuggest の input-type パラメータ"""

    TEXT = "text"
    VOCON_HYBRID = "vocon-hybrid"
    NMDP_ASR = "nmdp-asr"
    GENERIC_VOICE = "generic-voice"


GEOJSON_OPERATIONS = frozenset(
    {
        Operation.CONVERT_TO_3WA,
        Operation.CONVERT_TO_COORDINATES,
        Operation.GRID_SECTION,
    }
)
