"""ジオメトリのワイヤー形式エンコーダー

いずれも純粋関数。国コードの形式チェック以外で失敗しない。
"""
import re
from decimal import Decimal
from typing import Iterable, Union

from ....shared.exceptions.errors import EncodingError
from ..domain.models import BoundingBox, Circle, Coordinate, CountryFilter, Polygon

_COUNTRY_CODE_PATTERN = re.compile(r"[A-Za-z]{2}")


def encode_number(value: float) -> str:
    """
    数値をワイヤー形式の文字列に変換

    - 丸めない（往復可能な最短表現）
    - 指数表記は使わない
    - 整数値は末尾の ".0" を付けない

    例: -4.0 -> "-4", 178.2 -> "178.2", 1e-07 -> "0.0000001"
    """
    text = repr(float(value))
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


def encode_coordinate(coordinate: Coordinate) -> str:
    """Coordinate -> "緯度,経度" """
    return f"{encode_number(coordinate.latitude)},{encode_number(coordinate.longitude)}"


def encode_bounding_box(bounding_box: BoundingBox) -> str:
    """BoundingBox -> "南西緯度,南西経度,北東緯度,北東経度" """
    return (
        f"{encode_coordinate(bounding_box.south_west)},"
        f"{encode_coordinate(bounding_box.north_east)}"
    )


def encode_circle(circle: Circle) -> str:
    """Circle -> "緯度,経度,半径" （clip-to-circle 用の複合形式）"""
    return f"{encode_coordinate(circle.center)},{encode_number(circle.radius)}"


def encode_circle_parts(circle: Circle) -> tuple[str, str]:
    """Circle -> ("緯度,経度", "半径") （中心と半径を別パラメータで送る場合）"""
    return encode_coordinate(circle.center), encode_number(circle.radius)


def encode_polygon(polygon: Polygon) -> str:
    """
    Polygon -> "緯度,経度,緯度,経度,..."

    入力順のまま。重複除去やリングの自動クローズは行わない。
    """
    return ",".join(encode_coordinate(point) for point in polygon.points)


def encode_country_filter(countries: Union[CountryFilter, Iterable[str]]) -> str:
    """
    国コードのリスト -> "GB,BE"

    大文字に正規化し、入力順・重複はそのまま。
    2文字の英字でないコードが1つでもあれば EncodingError（部分的な出力はしない）。
    """
    codes = countries.codes if isinstance(countries, CountryFilter) else CountryFilter(countries).codes
    if not codes:
        raise EncodingError("Country filter must contain at least one code")

    normalized = []
    for code in codes:
        if not isinstance(code, str) or not _COUNTRY_CODE_PATTERN.fullmatch(code):
            raise EncodingError(
                f"Invalid country code: {code!r} (expected exactly two letters)"
            )
        normalized.append(code.upper())

    return ",".join(normalized)
