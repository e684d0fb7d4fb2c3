"""what3words APIクライアント"""
import re
from dataclasses import replace
from typing import Any, Optional

from ....infrastructure.config.settings import Settings
from ....shared.exceptions.errors import ConfigurationError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from ..api.request_assembler import DEFAULT_HOST, ClientConfig, OptionsBuilder, build_request
from ..api.response_decoder import decode_response
from ..api.transport import Transport
from ..domain.enums import Operation, ResponseShape
from ..domain.models import BoundingBox, Coordinate
from ..domain.responses import AutosuggestResult
from ..encoders.geometry import encode_bounding_box, encode_coordinate
from ..options.builders import (
    AutosuggestOptions,
    ConvertTo3WAOptions,
    ConvertToCoordinatesOptions,
    GridSectionOptions,
)

logger = get_logger(__name__)

# 単語に使えない文字と、単語の区切り文字（各言語の句点を含む）
_WORD = r"[^0-9`~!@#$%^&*()+\-_=\[{\]}\\|'<>.,;:/\"?\s]+"
_SEPARATOR = r"[.｡。･・︒។։။۔።।]"
_THREE_WORDS = rf"{_WORD}{_SEPARATOR}{_WORD}{_SEPARATOR}{_WORD}"

POSSIBLE_3WA_PATTERN = re.compile(rf"^/*{_THREE_WORDS}$")
FIND_3WA_PATTERN = re.compile(_THREE_WORDS)


def is_possible_3wa(text: str) -> bool:
    """3単語アドレスの形式に見えるか（APIは呼ばない）"""
    return bool(POSSIBLE_3WA_PATTERN.match(text.strip()))


def find_possible_3wa(text: str) -> list[str]:
    """テキスト中の3単語アドレスらしき文字列をすべて返す（APIは呼ばない）"""
    return FIND_3WA_PATTERN.findall(text)


class W3WClient:
    """
    what3words APIクライアント

    各オペレーションは shape 引数で戻り値の形を選べる。
    よく使う形には専用のメソッド（*_json, *_string, *_floats）がある。

    Example:
        >>> client = W3WClient(api_key="your_api_key")
        >>> client.convert_to_3wa_string(Coordinate(51.520847, -0.195521))
        'filled.count.soap'
        >>> client.convert_to_coordinates_floats("filled.count.soap")
        (51.520847, -0.195521)
    """

    def __init__(
        self,
        api_key: str,
        host: str = DEFAULT_HOST,
        transport: Optional[Transport] = None,
        default_language: Optional[str] = None,
    ) -> None:
        """
        Args:
            api_key: what3words APIキー
            host: APIのベースURL
            transport: 送信処理（Noneの場合は HTTPClient）
            default_language: language 未指定時に使う言語コード
        """
        self.config = ClientConfig(api_key=api_key, host=host)
        self.transport: Transport = transport if transport is not None else HTTPClient()
        self.default_language = default_language

        logger.info(f"W3WClient initialized: host={self.config.host}")

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[Transport] = None
    ) -> "W3WClient":
        """設定からクライアントを生成"""
        if not settings.has_api_key:
            raise ConfigurationError(
                "what3words API key is not set (set W3W_API_KEY or pass --api-key)"
            )

        if transport is None:
            transport = HTTPClient(
                timeout=settings.request_timeout,
                max_retries=settings.max_retries,
                backoff_factor=settings.backoff_factor,
                user_agent=settings.user_agent,
            )

        return cls(
            api_key=settings.w3w_api_key or "",
            host=settings.w3w_host,
            transport=transport,
            default_language=settings.default_language,
        )

    def _call(
        self,
        operation: Operation,
        required: dict[str, Any],
        options: Optional[OptionsBuilder],
        shape: ResponseShape,
    ) -> Any:
        """リクエストを組み立てて送信し、要求された形にデコード"""
        request = build_request(self.config, operation, required, options)
        logger.debug(f"Calling {operation.value} (shape={ResponseShape(shape).value})")
        raw = self.transport.send(request)
        return decode_response(raw, shape, operation)

    def _with_default_language(self, options: Any) -> Any:
        if self.default_language and options.language is None:
            return replace(options, language=self.default_language)
        return options

    # ---- convert-to-3wa ----

    def convert_to_3wa(
        self,
        coordinates: Coordinate,
        options: Optional[ConvertTo3WAOptions] = None,
        shape: ResponseShape = ResponseShape.FULL,
    ) -> Any:
        """
        座標を3単語アドレスに変換

        Args:
            coordinates: 座標
            options: オプション（language, format, locale）
            shape: 戻り値の形

        Returns:
            FULL の場合は ThreeWordAddress
        """
        options = self._with_default_language(options or ConvertTo3WAOptions())
        return self._call(
            Operation.CONVERT_TO_3WA,
            {"coordinates": encode_coordinate(coordinates)},
            options,
            shape,
        )

    def convert_to_3wa_json(
        self, coordinates: Coordinate, options: Optional[ConvertTo3WAOptions] = None
    ) -> Any:
        """座標を3単語アドレスに変換（パース済みJSON）"""
        return self.convert_to_3wa(coordinates, options, ResponseShape.RAW_JSON)

    def convert_to_3wa_string(
        self, coordinates: Coordinate, options: Optional[ConvertTo3WAOptions] = None
    ) -> str:
        """座標を3単語アドレスに変換（アドレス文字列のみ）"""
        return self.convert_to_3wa(coordinates, options, ResponseShape.WORDS)

    # ---- convert-to-coordinates ----

    def convert_to_coordinates(
        self,
        words: str,
        options: Optional[ConvertToCoordinatesOptions] = None,
        shape: ResponseShape = ResponseShape.FULL,
    ) -> Any:
        """
        3単語アドレスを座標に変換

        Args:
            words: 3単語アドレス（例: "filled.count.soap"）
            options: オプション（format, locale）
            shape: 戻り値の形

        Returns:
            FULL の場合は ThreeWordAddress

        Raises:
            EncodingError: words が空の場合
        """
        return self._call(
            Operation.CONVERT_TO_COORDINATES,
            {"words": words.strip().lstrip("/") if isinstance(words, str) else words},
            options or ConvertToCoordinatesOptions(),
            shape,
        )

    def convert_to_coordinates_json(
        self, words: str, options: Optional[ConvertToCoordinatesOptions] = None
    ) -> Any:
        """3単語アドレスを座標に変換（パース済みJSON）"""
        return self.convert_to_coordinates(words, options, ResponseShape.RAW_JSON)

    def convert_to_coordinates_floats(
        self, words: str, options: Optional[ConvertToCoordinatesOptions] = None
    ) -> tuple[float, float]:
        """3単語アドレスを座標に変換（(緯度, 経度) のみ）"""
        return self.convert_to_coordinates(words, options, ResponseShape.COORDINATES)

    # ---- autosuggest ----

    def autosuggest(
        self,
        input: str,
        options: Optional[AutosuggestOptions] = None,
        shape: ResponseShape = ResponseShape.FULL,
    ) -> Any:
        """
        入力途中・曖昧な3単語アドレスの候補を取得

        Returns:
            FULL の場合は AutosuggestResult
        """
        options = self._with_default_language(options or AutosuggestOptions())
        return self._call(Operation.AUTOSUGGEST, {"input": input}, options, shape)

    def autosuggest_json(self, input: str, options: Optional[AutosuggestOptions] = None) -> Any:
        """候補を取得（パース済みJSON）"""
        return self.autosuggest(input, options, ResponseShape.RAW_JSON)

    # ---- grid-section ----

    def grid_section(
        self,
        bounding_box: BoundingBox,
        options: Optional[GridSectionOptions] = None,
        shape: ResponseShape = ResponseShape.FULL,
    ) -> Any:
        """
        矩形内のグリッド線を取得

        Returns:
            FULL の場合は GridSection
        """
        return self._call(
            Operation.GRID_SECTION,
            {"bounding-box": encode_bounding_box(bounding_box)},
            options or GridSectionOptions(),
            shape,
        )

    def grid_section_json(
        self, bounding_box: BoundingBox, options: Optional[GridSectionOptions] = None
    ) -> Any:
        """グリッド線を取得（パース済みJSON）"""
        return self.grid_section(bounding_box, options, ResponseShape.RAW_JSON)

    # ---- available-languages ----

    def available_languages(self, shape: ResponseShape = ResponseShape.FULL) -> Any:
        """
        利用可能な言語とロケールの一覧を取得

        Returns:
            FULL の場合は AvailableLanguages
        """
        return self._call(Operation.AVAILABLE_LANGUAGES, {}, None, shape)

    def available_languages_json(self) -> Any:
        """利用可能な言語を取得（パース済みJSON）"""
        return self.available_languages(ResponseShape.RAW_JSON)

    # ---- helpers ----

    def is_valid_3wa(self, text: str) -> bool:
        """
        実在する3単語アドレスかどうか

        形式チェックの後、autosuggest で完全一致する候補があるかを確認する。
        """
        if not is_possible_3wa(text):
            return False

        words = text.strip().lstrip("/")
        result: AutosuggestResult = self.autosuggest(words, AutosuggestOptions(n_results=1))
        return any(s.words.lower() == words.lower() for s in result.suggestions)

    def close(self) -> None:
        """Transport をクローズ"""
        self.transport.close()

    def __enter__(self) -> "W3WClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
