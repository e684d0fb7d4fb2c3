"""CLIエントリーポイント"""
import argparse
import json
import sys
from typing import Any, Optional

from .features.geocoding.domain.models import BoundingBox, Circle, Coordinate, CountryFilter, Polygon
from .features.geocoding.options.builders import (
    AutosuggestOptions,
    ConvertTo3WAOptions,
    ConvertToCoordinatesOptions,
    GridSectionOptions,
)
from .features.geocoding.services.w3w_client import W3WClient
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import ResponseError, W3WError
from .shared.logging.config import get_logger, setup_logging

logger = get_logger(__name__)


def _parse_circle(text: str) -> Circle:
    """「緯度,経度,半径」形式"""
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"Invalid circle: {text!r} (expected 'lat,lng,radius_km')")
    try:
        radius = float(parts[2])
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid circle radius: {parts[2]!r}")
    return Circle(center=Coordinate.from_string(",".join(parts[:2])), radius=radius)


def _parse_polygon(text: str) -> Polygon:
    """「緯度,経度,緯度,経度,...」形式"""
    parts = [part.strip() for part in text.split(",")]
    if len(parts) % 2 != 0:
        raise argparse.ArgumentTypeError(f"Invalid polygon: {text!r} (expected lat,lng pairs)")
    return Polygon(
        Coordinate.from_string(f"{parts[i]},{parts[i + 1]}") for i in range(0, len(parts), 2)
    )


def build_parser() -> argparse.ArgumentParser:
    """引数パーサーを構築"""
    parser = argparse.ArgumentParser(
        prog="w3w",
        description="what3words API クライアント",
    )

    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="環境変数ファイルのパス（デフォルト: .env）",
    )
    parser.add_argument(
        "--api-key",
        type=str,
        help="what3words APIキー（未指定時は W3W_API_KEY）",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="ログレベル",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    to_3wa = subparsers.add_parser("to-3wa", help="座標を3単語アドレスに変換")
    to_3wa.add_argument("latitude", type=float, help="緯度")
    to_3wa.add_argument("longitude", type=float, help="経度")
    to_3wa.add_argument("--language", type=str, help="言語コード")
    to_3wa.add_argument("--locale", type=str, help="ロケール")
    to_3wa.add_argument("--format", choices=["json", "geojson"], help="レスポンス形式")

    to_coordinates = subparsers.add_parser("to-coordinates", help="3単語アドレスを座標に変換")
    to_coordinates.add_argument("words", type=str, help="3単語アドレス（例: filled.count.soap）")
    to_coordinates.add_argument("--locale", type=str, help="ロケール")
    to_coordinates.add_argument("--format", choices=["json", "geojson"], help="レスポンス形式")

    autosuggest = subparsers.add_parser("autosuggest", help="3単語アドレスの候補を取得")
    autosuggest.add_argument("input", type=str, help="入力文字列")
    autosuggest.add_argument("--focus", type=str, help="フォーカス座標（lat,lng）")
    autosuggest.add_argument("--clip-to-circle", type=str, help="円（lat,lng,radius_km）")
    autosuggest.add_argument("--clip-to-country", type=str, help="国コード（カンマ区切り）")
    autosuggest.add_argument(
        "--clip-to-bounding-box", type=str, help="矩形（sw_lat,sw_lng,ne_lat,ne_lng）"
    )
    autosuggest.add_argument("--clip-to-polygon", type=str, help="ポリゴン（lat,lng,...）")
    autosuggest.add_argument("--language", type=str, help="言語コード")
    autosuggest.add_argument("--locale", type=str, help="ロケール")
    autosuggest.add_argument("--prefer-land", choices=["true", "false"], help="陸地を優先するか")
    autosuggest.add_argument("--n-results", type=int, help="候補の件数")

    grid = subparsers.add_parser("grid-section", help="矩形内のグリッド線を取得")
    grid.add_argument("bounding_box", type=str, help="矩形（sw_lat,sw_lng,ne_lat,ne_lng）")
    grid.add_argument("--format", choices=["json", "geojson"], help="レスポンス形式")

    subparsers.add_parser("languages", help="利用可能な言語の一覧を取得")

    return parser


def run_command(client: W3WClient, args: argparse.Namespace) -> Any:
    """サブコマンドを実行してパース済みJSONを返す"""
    if args.command == "to-3wa":
        return client.convert_to_3wa_json(
            Coordinate(latitude=args.latitude, longitude=args.longitude),
            ConvertTo3WAOptions(language=args.language, format=args.format, locale=args.locale),
        )

    if args.command == "to-coordinates":
        return client.convert_to_coordinates_json(
            args.words,
            ConvertToCoordinatesOptions(format=args.format, locale=args.locale),
        )

    if args.command == "autosuggest":
        prefer_land: Optional[bool] = None
        if args.prefer_land is not None:
            prefer_land = args.prefer_land == "true"
        options = AutosuggestOptions(
            focus=Coordinate.from_string(args.focus) if args.focus else None,
            circle=_parse_circle(args.clip_to_circle) if args.clip_to_circle else None,
            country=CountryFilter(args.clip_to_country) if args.clip_to_country else None,
            bounding_box=(
                BoundingBox.from_string(args.clip_to_bounding_box)
                if args.clip_to_bounding_box
                else None
            ),
            polygon=_parse_polygon(args.clip_to_polygon) if args.clip_to_polygon else None,
            language=args.language,
            prefer_land=prefer_land,
            locale=args.locale,
            n_results=args.n_results,
        )
        return client.autosuggest_json(args.input, options)

    if args.command == "grid-section":
        return client.grid_section_json(
            BoundingBox.from_string(args.bounding_box),
            GridSectionOptions(format=args.format),
        )

    if args.command == "languages":
        return client.available_languages_json()

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[list[str]] = None) -> int:
    """
    メインエントリーポイント

    Returns:
        int: 終了コード（0: 成功, 1: 失敗, 130: 中断）
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        # 設定を読み込み
        settings = Settings(_env_file=args.env_file)

        # コマンドライン引数で上書き
        if args.log_level:
            settings.log_level = args.log_level
        if args.api_key:
            settings.w3w_api_key = args.api_key

        setup_logging(level=settings.log_level, secrets=[settings.w3w_api_key])
        logger.debug(f"Running command: {args.command}")

        with W3WClient.from_settings(settings) as client:
            result = run_command(client, args)

        print(json.dumps(result, ensure_ascii=False, indent=2))
        return 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130  # SIGINT
    except argparse.ArgumentTypeError as e:
        logger.error(f"Invalid argument: {e}")
        return 1
    except ResponseError as e:
        logger.error(f"{e}")
        print(e.text, file=sys.stderr)
        return 1
    except W3WError as e:
        logger.error(f"{e}")
        return 1
    except Exception as e:
        logger.error(f"Application failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
