"""オペレーションごとのオプション

全フィールドの既定値は None（未設定）。未設定のフィールドはパラメータに
含めず、サーバー側の既定値を使わせる。パラメータの出力順は各クラスの
apply_to() に記述した順で固定。
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from ....shared.exceptions.errors import EncodingError
from ..domain.enums import InputType, ResponseFormat
from ..domain.models import BoundingBox, Circle, Coordinate, CountryFilter, Polygon
from ..encoders.geometry import (
    encode_bounding_box,
    encode_circle,
    encode_coordinate,
    encode_country_filter,
    encode_polygon,
)

Params = dict[str, str]
FormatValue = Union[ResponseFormat, str]
CountryValue = Union[CountryFilter, str, Iterable[str]]


def _coerce_format(options: object, value: Optional[FormatValue]) -> None:
    if value is not None:
        object.__setattr__(options, "format", ResponseFormat.from_value(value))


def _encode_bool(value: bool) -> str:
    return "true" if value else "false"


def _encode_count(value: int, name: str) -> str:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise EncodingError(f"{name} must be a positive integer, got {value!r}")
    return str(value)


@dataclass(frozen=True)
class ConvertTo3WAOptions:
    """convert-to-3wa のオプション"""

    language: Optional[str] = None
    format: Optional[FormatValue] = None
    locale: Optional[str] = None

    def __post_init__(self) -> None:
        _coerce_format(self, self.format)

    def apply_to(self, params: Params) -> Params:
        """設定済みフィールドを params に追加して返す"""
        if self.language is not None:
            params["language"] = self.language
        if self.format is not None:
            params["format"] = ResponseFormat.from_value(self.format).value
        if self.locale is not None:
            params["locale"] = self.locale
        return params

    def to_params(self) -> Params:
        return self.apply_to({})


@dataclass(frozen=True)
class ConvertToCoordinatesOptions:
    """convert-to-coordinates のオプション"""

    format: Optional[FormatValue] = None
    locale: Optional[str] = None

    def __post_init__(self) -> None:
        _coerce_format(self, self.format)

    def apply_to(self, params: Params) -> Params:
        """設定済みフィールドを params に追加して返す"""
        if self.format is not None:
            params["format"] = ResponseFormat.from_value(self.format).value
        if self.locale is not None:
            params["locale"] = self.locale
        return params

    def to_params(self) -> Params:
        return self.apply_to({})


@dataclass(frozen=True)
class AutosuggestOptions:
    """
    autosuggest のオプション

    focus / circle / bounding_box / polygon / country は互いに独立しており、
    自由に組み合わせられる。組み合わせの妥当性はサーバー側に任せる。
    """

    focus: Optional[Coordinate] = None
    circle: Optional[Circle] = None
    country: Optional[CountryValue] = None
    bounding_box: Optional[BoundingBox] = None
    polygon: Optional[Polygon] = None
    language: Optional[str] = None
    prefer_land: Optional[bool] = None
    locale: Optional[str] = None
    n_results: Optional[int] = None
    n_focus_results: Optional[int] = None
    input_type: Optional[Union[InputType, str]] = None

    def __post_init__(self) -> None:
        if self.country is not None and not isinstance(self.country, CountryFilter):
            object.__setattr__(self, "country", CountryFilter(self.country))
        if self.input_type is not None:
            try:
                object.__setattr__(self, "input_type", InputType(self.input_type))
            except ValueError:
                raise EncodingError(f"Invalid input-type: {self.input_type!r}")

    def apply_to(self, params: Params) -> Params:
        """設定済みフィールドを params に追加して返す"""
        if self.focus is not None:
            params["focus"] = encode_coordinate(self.focus)
        if self.circle is not None:
            params["clip-to-circle"] = encode_circle(self.circle)
        if self.country is not None:
            params["clip-to-country"] = encode_country_filter(self.country)
        if self.bounding_box is not None:
            params["clip-to-bounding-box"] = encode_bounding_box(self.bounding_box)
        if self.polygon is not None:
            params["clip-to-polygon"] = encode_polygon(self.polygon)
        if self.language is not None:
            params["language"] = self.language
        if self.prefer_land is not None:
            params["prefer-land"] = _encode_bool(self.prefer_land)
        if self.locale is not None:
            params["locale"] = self.locale
        if self.n_results is not None:
            params["n-results"] = _encode_count(self.n_results, "n_results")
        if self.n_focus_results is not None:
            params["n-focus-results"] = _encode_count(self.n_focus_results, "n_focus_results")
        if self.input_type is not None:
            params["input-type"] = InputType(self.input_type).value
        return params

    def to_params(self) -> Params:
        return self.apply_to({})


@dataclass(frozen=True)
class GridSectionOptions:
    """grid-section のオプション"""

    format: Optional[FormatValue] = None

    def __post_init__(self) -> None:
        _coerce_format(self, self.format)

    def apply_to(self, params: Params) -> Params:
        """設定済みフィールドを params に追加して返す"""
        if self.format is not None:
            params["format"] = ResponseFormat.from_value(self.format).value
        return params

    def to_params(self) -> Params:
        return self.apply_to({})
