"""ジオメトリエンコーダーのテスト"""

import pytest

from w3w_client.features.geocoding.domain.models import (
    BoundingBox,
    Circle,
    Coordinate,
    CountryFilter,
    Polygon,
)
from w3w_client.features.geocoding.encoders.geometry import (
    encode_bounding_box,
    encode_circle,
    encode_circle_parts,
    encode_coordinate,
    encode_country_filter,
    encode_number,
    encode_polygon,
)
from w3w_client.shared.exceptions.errors import EncodingError


@pytest.mark.parametrize(
    "value,expected",
    [
        (-4.0, "-4"),
        (22, "22"),
        (178.2, "178.2"),
        (51.520847, "51.520847"),
        (-0.195521, "-0.195521"),
        (0.1 + 0.2, "0.30000000000000004"),
        (1e-07, "0.0000001"),
        (1e22, "10000000000000000000000"),
    ],
)
def test_encode_number(value: float, expected: str) -> None:
    """丸めず、指数表記を使わない"""
    assert encode_number(value) == expected


def test_encode_coordinate() -> None:
    assert encode_coordinate(Coordinate(51.520847, -0.195521)) == "51.520847,-0.195521"


@pytest.mark.parametrize(
    "latitude,longitude",
    [
        (51.520847, -0.195521),
        (-33.868820, 151.209296),
        (0.0, 0.0),
        (89.999999, -179.999999),
        (1.23456789012345e-05, 123.456789012345),
    ],
)
def test_encode_coordinate_round_trip(latitude: float, longitude: float) -> None:
    """エンコード結果をパースすると元の値に戻る"""
    lat_text, lng_text = encode_coordinate(Coordinate(latitude, longitude)).split(",")
    assert "e" not in lat_text.lower()
    assert "e" not in lng_text.lower()
    assert float(lat_text) == latitude
    assert float(lng_text) == longitude


def test_encode_bounding_box_across_antimeridian() -> None:
    """日付変更線をまたぐ経度でも失敗しない"""
    bounding_box = BoundingBox(
        south_west=Coordinate(-4.0, 178.2),
        north_east=Coordinate(22.0, 195.4),
    )
    assert encode_bounding_box(bounding_box) == "-4,178.2,22,195.4"


def test_encode_circle_compound() -> None:
    circle = Circle(center=Coordinate(51.521, -0.343), radius=142)
    assert encode_circle(circle) == "51.521,-0.343,142"


def test_encode_circle_parts() -> None:
    """中心と半径を別パラメータで送る形"""
    circle = Circle(center=Coordinate(51.521, -0.343), radius=2.5)
    assert encode_circle_parts(circle) == ("51.521,-0.343", "2.5")


def test_encode_polygon_keeps_order_without_closing() -> None:
    polygon = Polygon(
        [
            Coordinate(51.521, -0.343),
            Coordinate(52.6, 2.3324),
            Coordinate(54.234, -1.4),
        ]
    )
    encoded = encode_polygon(polygon)
    assert encoded == "51.521,-0.343,52.6,2.3324,54.234,-1.4"
    assert len(encoded.split(",")) == 6


def test_encode_polygon_keeps_duplicates() -> None:
    point = Coordinate(51.521, -0.343)
    polygon = Polygon([point, Coordinate(52.6, 2.3324), point])
    assert encode_polygon(polygon) == "51.521,-0.343,52.6,2.3324,51.521,-0.343"


def test_encode_country_filter_uppercases() -> None:
    """大文字・小文字どちらでも同じ結果になる"""
    assert encode_country_filter(["gb", "be"]) == "GB,BE"
    assert encode_country_filter(["gb", "be"]) == encode_country_filter(["GB", "BE"])


def test_encode_country_filter_keeps_order_and_duplicates() -> None:
    assert encode_country_filter(CountryFilter(["be", "GB", "be"])) == "BE,GB,BE"


def test_encode_country_filter_from_string() -> None:
    assert encode_country_filter(CountryFilter("gb, fr")) == "GB,FR"


def test_encode_country_filter_passes_unknown_codes() -> None:
    """実在しない国コードでも形式が正しければそのまま送る"""
    assert encode_country_filter(["zz"]) == "ZZ"


@pytest.mark.parametrize(
    "codes",
    [
        ["belgium"],
        ["G1"],
        ["gb", "G"],
        ["gb", "fra"],
        ["g-"],
        ["GB\n"],
        [""],
        [],
    ],
)
def test_encode_country_filter_rejects_malformed(codes: list[str]) -> None:
    with pytest.raises(EncodingError):
        encode_country_filter(codes)
