#!/usr/bin/env python3
"""
リソース検証スクリプト

リソースが宣言するプロファイルのSHACLシェイプでリソースを検証し、結果を表示します。

使用方法:
    uv run python validate_resource.py https://example.org/catalog/1
    uv run python validate_resource.py https://example.org/catalog/1 --format turtle
    uv run python validate_resource.py https://example.org/catalog/1 -v

終了コード:
    0: 適合, 1: 不適合, 2: エラー
"""

import argparse
import asyncio
import logging
import sys

import config
from backend.models.schemas import ReportResponse
from pipeline import (
    ResourceFetcher,
    Report,
    Severity,
    ValidationPipeline,
    ValidatorError,
    default_registry,
)


EXIT_CONFORMS = 0
EXIT_NON_CONFORMANT = 1
EXIT_ERROR = 2


async def run(identifier: str, timeout: float, max_redirects: int) -> Report:
    """パイプラインを作成して1件検証"""
    async with ResourceFetcher(timeout=timeout, max_redirects=max_redirects) as fetcher:
        pipeline = ValidationPipeline(fetcher)
        return await pipeline.validate(identifier)


def print_summary(identifier: str, report: Report) -> None:
    """検証結果のサマリーを表示"""
    print("=" * 60)
    print(f"Resource: {identifier}")
    print("=" * 60)
    if report.conforms:
        print("✓ データは全ての制約に適合しています")
        return

    counts = ", ".join(f"{severity.value}: {report.count(severity)}" for severity in Severity)
    print(f"✗ {len(report.violations)}件の検証結果があります ({counts})")
    for violation in report.violations:
        print(f"\n[{violation.severity.value}] {violation.focus_node}")
        if violation.result_path is not None:
            print(f"  パス: {violation.result_path}")
        if violation.message:
            print(f"  メッセージ: {violation.message}")


def report_to_json(identifier: str, report: Report) -> str:
    """APIと同じ形式のJSONに変換"""
    return ReportResponse.from_report(identifier, report).model_dump_json(indent=2)


def main(argv=None) -> int:
    """メイン関数"""
    rdf_formats = [fmt.name for fmt in default_registry.writable()]

    parser = argparse.ArgumentParser(
        description="リソースが宣言するプロファイルのSHACLシェイプで検証",
    )
    parser.add_argument("resource", help="検証対象リソースのIRI")
    parser.add_argument(
        "--format", "-f",
        choices=["text", "json"] + rdf_formats,
        default="text",
        help="出力フォーマット (デフォルト: text)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=config.FETCH_TIMEOUT_SECONDS,
        help=f"リソース取得のタイムアウト秒 (デフォルト: {config.FETCH_TIMEOUT_SECONDS})",
    )
    parser.add_argument(
        "--max-redirects",
        type=int,
        default=config.MAX_REDIRECTS,
        help=f"リダイレクトの最大追跡回数 (デフォルト: {config.MAX_REDIRECTS})",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="詳細出力モード",
    )

    args = parser.parse_args(argv)

    # ロギング設定
    log_level = logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFMT,
    )

    try:
        report = asyncio.run(run(args.resource, args.timeout, args.max_redirects))
    except ValidatorError as e:
        print(f"エラー: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.format == "text":
        print_summary(args.resource, report)
    elif args.format == "json":
        print(report_to_json(args.resource, report))
    else:
        fmt = next(fmt for fmt in default_registry.writable() if fmt.name == args.format)
        print(fmt.encode(report.to_graph()))

    return EXIT_CONFORMS if report.conforms else EXIT_NON_CONFORMANT


if __name__ == "__main__":
    sys.exit(main())
