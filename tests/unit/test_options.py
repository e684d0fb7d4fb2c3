"""オプションのパラメータ生成テスト"""

import pytest

from w3w_client.features.geocoding.domain.enums import InputType, ResponseFormat
from w3w_client.features.geocoding.domain.models import (
    BoundingBox,
    Circle,
    Coordinate,
    CountryFilter,
    Polygon,
)
from w3w_client.features.geocoding.options.builders import (
    AutosuggestOptions,
    ConvertTo3WAOptions,
    ConvertToCoordinatesOptions,
    GridSectionOptions,
)
from w3w_client.shared.exceptions.errors import EncodingError


@pytest.mark.parametrize(
    "options",
    [
        ConvertTo3WAOptions(),
        ConvertToCoordinatesOptions(),
        AutosuggestOptions(),
        GridSectionOptions(),
    ],
)
def test_unset_options_produce_no_params(options: object) -> None:
    """未設定のフィールドはキーごと出力しない"""
    assert options.to_params() == {}  # type: ignore[attr-defined]


def test_convert_to_3wa_order() -> None:
    options = ConvertTo3WAOptions(locale="zh_tr", format="geojson", language="zh")
    assert list(options.to_params().items()) == [
        ("language", "zh"),
        ("format", "geojson"),
        ("locale", "zh_tr"),
    ]


def test_convert_to_coordinates_params() -> None:
    options = ConvertToCoordinatesOptions(format=ResponseFormat.JSON, locale="zh_tr")
    assert options.to_params() == {"format": "json", "locale": "zh_tr"}


def test_grid_section_params() -> None:
    assert GridSectionOptions(format="GeoJSON").to_params() == {"format": "geojson"}


def test_invalid_format_is_rejected() -> None:
    with pytest.raises(EncodingError):
        ConvertTo3WAOptions(format="xml")


def test_apply_to_extends_existing_mapping() -> None:
    params = {"coordinates": "51.5,-0.12"}
    result = ConvertTo3WAOptions(language="fr").apply_to(params)
    assert result is params
    assert list(params) == ["coordinates", "language"]


def _full_autosuggest_kwargs() -> dict[str, object]:
    return {
        "focus": Coordinate(51.521251, -0.203586),
        "circle": Circle(center=Coordinate(51.521, -0.343), radius=142),
        "country": ["gb", "be"],
        "bounding_box": BoundingBox(Coordinate(51.521, -0.343), Coordinate(52.6, 2.3324)),
        "polygon": Polygon(
            [
                Coordinate(51.521, -0.343),
                Coordinate(52.6, 2.3324),
                Coordinate(54.234, -1.4),
            ]
        ),
        "language": "en",
        "prefer_land": False,
        "locale": "en_gb",
        "n_results": 5,
        "n_focus_results": 2,
        "input_type": "vocon-hybrid",
    }


def test_autosuggest_all_fields_in_fixed_order() -> None:
    params = AutosuggestOptions(**_full_autosuggest_kwargs()).to_params()  # type: ignore[arg-type]
    assert list(params.items()) == [
        ("focus", "51.521251,-0.203586"),
        ("clip-to-circle", "51.521,-0.343,142"),
        ("clip-to-country", "GB,BE"),
        ("clip-to-bounding-box", "51.521,-0.343,52.6,2.3324"),
        ("clip-to-polygon", "51.521,-0.343,52.6,2.3324,54.234,-1.4"),
        ("language", "en"),
        ("prefer-land", "false"),
        ("locale", "en_gb"),
        ("n-results", "5"),
        ("n-focus-results", "2"),
        ("input-type", "vocon-hybrid"),
    ]


def test_autosuggest_is_deterministic_regardless_of_construction_order() -> None:
    kwargs = _full_autosuggest_kwargs()
    reversed_kwargs = dict(reversed(list(kwargs.items())))

    first = AutosuggestOptions(**kwargs).to_params()  # type: ignore[arg-type]
    second = AutosuggestOptions(**reversed_kwargs).to_params()  # type: ignore[arg-type]

    assert list(first.items()) == list(second.items())


def test_autosuggest_geo_filters_can_be_combined() -> None:
    """フィルター同士の排他チェックはしない"""
    options = AutosuggestOptions(
        focus=Coordinate(51.5, -0.12),
        circle=Circle(center=Coordinate(51.5, -0.12), radius=10),
        bounding_box=BoundingBox(Coordinate(51.0, -1.0), Coordinate(52.0, 1.0)),
    )
    assert set(options.to_params()) == {"focus", "clip-to-circle", "clip-to-bounding-box"}


def test_autosuggest_country_is_normalized_to_filter() -> None:
    options = AutosuggestOptions(country="gb,fr")
    assert options.country == CountryFilter(["gb", "fr"])
    assert options.to_params() == {"clip-to-country": "GB,FR"}


def test_autosuggest_invalid_country_propagates_encoding_error() -> None:
    options = AutosuggestOptions(country=["belgium"])
    with pytest.raises(EncodingError):
        options.to_params()


def test_autosuggest_prefer_land_true() -> None:
    assert AutosuggestOptions(prefer_land=True).to_params() == {"prefer-land": "true"}


@pytest.mark.parametrize("n_results", [0, -3, True])
def test_autosuggest_invalid_n_results(n_results: int) -> None:
    with pytest.raises(EncodingError):
        AutosuggestOptions(n_results=n_results).to_params()


def test_autosuggest_input_type() -> None:
    options = AutosuggestOptions(input_type=InputType.GENERIC_VOICE, language="en")
    assert options.to_params() == {"language": "en", "input-type": "generic-voice"}

    with pytest.raises(EncodingError):
        AutosuggestOptions(input_type="speech")
