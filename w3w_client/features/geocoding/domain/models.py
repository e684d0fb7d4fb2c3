"""ジオコーディング機能のドメインモデル（ジオメトリ値オブジェクト）"""
import math
from dataclasses import dataclass
from typing import Iterable, Union

from ....shared.exceptions.errors import EncodingError

# APIが受け付けるポリゴンの最大頂点数
MAX_POLYGON_POINTS = 25


def _ensure_finite(value: float, name: str) -> float:
    """有限の数値であることを確認して float として返す"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EncodingError(f"{name} must be a number, got {type(value).__name__}")
    try:
        number = float(value)
    except OverflowError:
        raise EncodingError(f"{name} is out of range: {value!r}")
    if not math.isfinite(number):
        raise EncodingError(f"{name} must be finite, got {value!r}")
    return number


@dataclass(frozen=True)
class Coordinate:
    """
    緯度・経度の組

    範囲チェックは行わない（日付変更線をまたぐバウンディングボックスのため
    経度180度超を許容する）。意味的な検証はサーバー側で行われる。
    """

    latitude: float  # 緯度
    longitude: float  # 経度

    def __post_init__(self) -> None:
        object.__setattr__(self, "latitude", _ensure_finite(self.latitude, "latitude"))
        object.__setattr__(self, "longitude", _ensure_finite(self.longitude, "longitude"))

    def to_tuple(self) -> tuple[float, float]:
        """(緯度, 経度)のタプルとして返す"""
        return (self.latitude, self.longitude)

    @classmethod
    def from_string(cls, text: str) -> "Coordinate":
        """「緯度,経度」形式の文字列から生成"""
        parts = [part.strip() for part in text.split(",")]
        if len(parts) != 2:
            raise EncodingError(f"Invalid coordinate: {text!r} (expected 'lat,lng')")
        try:
            return cls(latitude=float(parts[0]), longitude=float(parts[1]))
        except ValueError:
            raise EncodingError(f"Invalid coordinate: {text!r} (expected 'lat,lng')")


@dataclass(frozen=True)
class BoundingBox:
    """南西端と北東端の2点で定義される矩形"""

    south_west: Coordinate
    north_east: Coordinate

    def __post_init__(self) -> None:
        if self.south_west.latitude > self.north_east.latitude:
            raise EncodingError(
                "south_west latitude must not be greater than north_east latitude "
                f"({self.south_west.latitude} > {self.north_east.latitude})"
            )

    @classmethod
    def from_string(cls, text: str) -> "BoundingBox":
        """「南西緯度,南西経度,北東緯度,北東経度」形式の文字列から生成"""
        parts = [part.strip() for part in text.split(",")]
        if len(parts) != 4:
            raise EncodingError(
                f"Invalid bounding box: {text!r} (expected 'sw_lat,sw_lng,ne_lat,ne_lng')"
            )
        return cls(
            south_west=Coordinate.from_string(",".join(parts[:2])),
            north_east=Coordinate.from_string(",".join(parts[2:])),
        )


@dataclass(frozen=True)
class Circle:
    """中心点と半径（km）で定義される円"""

    center: Coordinate
    radius: float  # 半径（km）

    def __post_init__(self) -> None:
        radius = _ensure_finite(self.radius, "radius")
        if radius <= 0:
            raise EncodingError(f"radius must be positive, got {radius!r}")
        object.__setattr__(self, "radius", radius)


@dataclass(frozen=True)
class Polygon:
    """
    頂点の並びで定義されるポリゴン

    リングは自動で閉じない。閉じたリングが必要な場合は呼び出し側で
    先頭の頂点を末尾に追加すること。
    """

    points: tuple[Coordinate, ...]

    def __init__(self, points: Iterable[Coordinate]) -> None:
        object.__setattr__(self, "points", tuple(points))
        self.__post_init__()

    def __post_init__(self) -> None:
        if not self.points:
            raise EncodingError("polygon must have at least one point")
        for point in self.points:
            if not isinstance(point, Coordinate):
                raise EncodingError(
                    f"polygon points must be Coordinate, got {type(point).__name__}"
                )
        if len(self.points) > MAX_POLYGON_POINTS:
            raise EncodingError(
                f"polygon must have at most {MAX_POLYGON_POINTS} points, got {len(self.points)}"
            )

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class CountryFilter:
    """
    国コード（2文字）のリスト

    形式チェックはエンコード時に行う。実在する国コードかどうかは検証しない。
    """

    codes: tuple[str, ...]

    def __init__(self, codes: Union[str, Iterable[str]]) -> None:
        if isinstance(codes, str):
            codes = [code.strip() for code in codes.split(",")]
        object.__setattr__(self, "codes", tuple(codes))
