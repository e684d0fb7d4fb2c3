"""テスト共通のフィクスチャ"""

import json
from typing import Any, Optional, Union

import pytest

from w3w_client.features.geocoding.api.request_assembler import RequestDescriptor
from w3w_client.features.geocoding.api.transport import RawResponse
from w3w_client.features.geocoding.services.w3w_client import W3WClient

API_KEY = "TEST-API-KEY"

CONVERT_JSON: dict[str, Any] = {
    "country": "GB",
    "square": {
        "southwest": {"lng": -0.195543, "lat": 51.520833},
        "northeast": {"lng": -0.195499, "lat": 51.52086},
    },
    "nearestPlace": "Bayswater, London",
    "coordinates": {"lng": -0.195521, "lat": 51.520847},
    "words": "filled.count.soap",
    "language": "en",
    "map": "https://w3w.co/filled.count.soap",
}

CONVERT_GEOJSON: dict[str, Any] = {
    "features": [
        {
            "bbox": [-0.195543, 51.520833, -0.195499, 51.52086],
            "geometry": {"coordinates": [-0.195521, 51.520847], "type": "Point"},
            "type": "Feature",
            "properties": {
                "country": "GB",
                "nearestPlace": "Bayswater, London",
                "words": "filled.count.soap",
                "language": "en",
                "map": "https://w3w.co/filled.count.soap",
            },
        }
    ],
    "type": "FeatureCollection",
}

AUTOSUGGEST_JSON: dict[str, Any] = {
    "suggestions": [
        {
            "country": "GB",
            "nearestPlace": "Bayswater, London",
            "words": "filled.count.soap",
            "rank": 1,
            "language": "en",
        },
        {
            "country": "US",
            "nearestPlace": "Brooklyn, New York",
            "words": "filled.count.snap",
            "distanceToFocusKm": 12,
            "rank": 2,
            "language": "en",
        },
    ]
}

GRID_JSON: dict[str, Any] = {
    "lines": [
        {
            "start": {"lng": 0.116126, "lat": 52.208009},
            "end": {"lng": 0.11754, "lat": 52.208009},
        },
        {
            "start": {"lng": 0.116126, "lat": 52.208036},
            "end": {"lng": 0.11754, "lat": 52.208036},
        },
    ]
}

GRID_GEOJSON: dict[str, Any] = {
    "features": [
        {
            "geometry": {
                "coordinates": [
                    [[0.116126, 52.208009], [0.11754, 52.208009]],
                    [[0.116126, 52.208036], [0.11754, 52.208036]],
                ],
                "type": "MultiLineString",
            },
            "type": "Feature",
            "properties": {},
        }
    ],
    "type": "FeatureCollection",
}

LANGUAGES_JSON: dict[str, Any] = {
    "languages": [
        {"nativeName": "English", "code": "en", "name": "English"},
        {
            "nativeName": "中文",
            "code": "zh",
            "name": "Chinese",
            "locales": [
                {"nativeName": "中文（繁體）", "code": "zh_tr", "name": "Chinese (Traditional)"},
                {"nativeName": "中文（简体）", "code": "zh_si", "name": "Chinese (Simplified)"},
            ],
        },
    ]
}

BAD_WORDS_BODY = b'{"error":{"code":"BadWords","message":"words must be a valid 3 word address"}}'


def make_response(
    payload: Union[dict[str, Any], bytes], status_code: int = 200
) -> RawResponse:
    """テスト用の RawResponse を生成"""
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
    return RawResponse(status_code=status_code, body=body, url="https://api.what3words.com/v3/test")


class FakeTransport:
    """送信内容を記録し、用意したレスポンスを返す Transport"""

    def __init__(self, *responses: Union[RawResponse, Exception]) -> None:
        self.responses = list(responses)
        self.requests: list[RequestDescriptor] = []
        self.closed = False

    def send(self, request: RequestDescriptor) -> RawResponse:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True

    @property
    def last_request(self) -> Optional[RequestDescriptor]:
        return self.requests[-1] if self.requests else None


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(fake_transport: FakeTransport) -> W3WClient:
    return W3WClient(api_key=API_KEY, transport=fake_transport)
