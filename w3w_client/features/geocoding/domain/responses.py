"""APIレスポンスのドメインモデル

各モデルはフラットなJSON形式と（対応するオペレーションでは）GeoJSON形式の
両方から生成できる。スキーマに合わない場合は KeyError / TypeError /
ValueError を送出し、呼び出し側（デコーダー）で DecodeError に変換する。
"""
from dataclasses import dataclass, field
from typing import Any, Optional

from .models import BoundingBox, Coordinate


def _coordinate(data: dict[str, Any]) -> Coordinate:
    """{"lat": ..., "lng": ...} から Coordinate を生成"""
    return Coordinate(latitude=data["lat"], longitude=data["lng"])


def _position(position: list[Any]) -> Coordinate:
    """GeoJSONの [経度, 緯度] から Coordinate を生成"""
    if len(position) < 2:
        raise ValueError(f"GeoJSON position must have 2 elements: {position!r}")
    return Coordinate(latitude=position[1], longitude=position[0])


def _first_feature(data: dict[str, Any]) -> dict[str, Any]:
    """FeatureCollection の先頭 Feature を取得"""
    features = data["features"]
    if not features:
        raise ValueError("GeoJSON FeatureCollection has no features")
    return features[0]


def is_geojson(data: Any) -> bool:
    """GeoJSONの FeatureCollection 形式かどうか"""
    return (
        isinstance(data, dict)
        and data.get("type") == "FeatureCollection"
        and isinstance(data.get("features"), list)
    )


@dataclass(frozen=True)
class ThreeWordAddress:
    """convert-to-3wa / convert-to-coordinates のレスポンス"""

    words: str  # 3単語アドレス
    coordinates: Optional[Coordinate] = None  # 正方形の中心座標
    country: Optional[str] = None  # 国コード
    square: Optional[BoundingBox] = None  # 3m四方の正方形
    nearest_place: Optional[str] = None  # 最寄りの地名
    language: Optional[str] = None
    locale: Optional[str] = None
    map: Optional[str] = None  # 地図URL

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "ThreeWordAddress":
        """フラットなJSON形式から生成"""
        words = data["words"]
        if not isinstance(words, str):
            raise TypeError(f"words must be a string, got {type(words).__name__}")

        square = data.get("square")
        return cls(
            words=words,
            coordinates=_coordinate(data["coordinates"]) if data.get("coordinates") else None,
            country=data.get("country"),
            square=(
                BoundingBox(
                    south_west=_coordinate(square["southwest"]),
                    north_east=_coordinate(square["northeast"]),
                )
                if square
                else None
            ),
            nearest_place=data.get("nearestPlace"),
            language=data.get("language"),
            locale=data.get("locale"),
            map=data.get("map"),
        )

    @classmethod
    def from_geojson(cls, data: dict[str, Any]) -> "ThreeWordAddress":
        """GeoJSON形式から生成"""
        feature = _first_feature(data)
        properties = feature["properties"]
        words = properties["words"]
        if not isinstance(words, str):
            raise TypeError(f"words must be a string, got {type(words).__name__}")

        # bbox: [西経度, 南緯度, 東経度, 北緯度]
        bbox = feature.get("bbox")
        square = None
        if bbox:
            square = BoundingBox(
                south_west=Coordinate(latitude=bbox[1], longitude=bbox[0]),
                north_east=Coordinate(latitude=bbox[3], longitude=bbox[2]),
            )

        return cls(
            words=words,
            coordinates=_position(feature["geometry"]["coordinates"]),
            country=properties.get("country"),
            square=square,
            nearest_place=properties.get("nearestPlace"),
            language=properties.get("language"),
            locale=properties.get("locale"),
            map=properties.get("map"),
        )

    @classmethod
    def from_payload(cls, data: Any) -> "ThreeWordAddress":
        """JSON / GeoJSON を判別して生成"""
        if is_geojson(data):
            return cls.from_geojson(data)
        return cls.from_json(data)


@dataclass(frozen=True)
class Suggestion:
    """autosuggest の候補1件"""

    words: str
    rank: int
    country: Optional[str] = None
    nearest_place: Optional[str] = None
    distance_to_focus_km: Optional[float] = None  # focus 指定時のみ
    language: Optional[str] = None
    locale: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Suggestion":
        words = data["words"]
        if not isinstance(words, str):
            raise TypeError(f"words must be a string, got {type(words).__name__}")
        rank = data["rank"]
        if isinstance(rank, bool) or not isinstance(rank, int):
            raise ValueError(f"rank must be an integer, got {rank!r}")
        return cls(
            words=words,
            rank=rank,
            country=data.get("country"),
            nearest_place=data.get("nearestPlace"),
            distance_to_focus_km=data.get("distanceToFocusKm"),
            language=data.get("language"),
            locale=data.get("locale"),
        )


@dataclass(frozen=True)
class AutosuggestResult:
    """autosuggest のレスポンス"""

    suggestions: list[Suggestion] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: Any) -> "AutosuggestResult":
        return cls(suggestions=[Suggestion.from_json(item) for item in data["suggestions"]])

    def words(self) -> list[str]:
        """候補の3単語アドレスをランク順に返す"""
        return [s.words for s in sorted(self.suggestions, key=lambda s: s.rank)]


@dataclass(frozen=True)
class GridLine:
    """グリッド線（始点と終点）"""

    start: Coordinate
    end: Coordinate


@dataclass(frozen=True)
class GridSection:
    """grid-section のレスポンス"""

    lines: list[GridLine] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "GridSection":
        return cls(
            lines=[
                GridLine(start=_coordinate(line["start"]), end=_coordinate(line["end"]))
                for line in data["lines"]
            ]
        )

    @classmethod
    def from_geojson(cls, data: dict[str, Any]) -> "GridSection":
        # MultiLineString: [[[経度, 緯度], [経度, 緯度]], ...]
        lines = []
        for feature in data["features"]:
            for segment in feature["geometry"]["coordinates"]:
                if len(segment) != 2:
                    raise ValueError(f"grid line must have 2 positions: {segment!r}")
                lines.append(GridLine(start=_position(segment[0]), end=_position(segment[1])))
        return cls(lines=lines)

    @classmethod
    def from_payload(cls, data: Any) -> "GridSection":
        if is_geojson(data):
            return cls.from_geojson(data)
        return cls.from_json(data)


@dataclass(frozen=True)
class Locale:
    """言語のロケール"""

    code: str
    name: Optional[str] = None
    native_name: Optional[str] = None


@dataclass(frozen=True)
class Language:
    """利用可能な言語"""

    code: str
    name: Optional[str] = None
    native_name: Optional[str] = None
    locales: list[Locale] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Language":
        return cls(
            code=data["code"],
            name=data.get("name"),
            native_name=data.get("nativeName"),
            locales=[
                Locale(
                    code=locale["code"],
                    name=locale.get("name"),
                    native_name=locale.get("nativeName"),
                )
                for locale in data.get("locales") or []
            ],
        )


@dataclass(frozen=True)
class AvailableLanguages:
    """available-languages のレスポンス"""

    languages: list[Language] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: Any) -> "AvailableLanguages":
        return cls(languages=[Language.from_json(item) for item in data["languages"]])

    def codes(self) -> list[str]:
        """言語コードの一覧"""
        return [language.code for language in self.languages]
