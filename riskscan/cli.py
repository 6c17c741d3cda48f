"""CLI entrypoint for riskscan."""

import argparse
import dataclasses
import json
import os
import sys

from .config import AnalyzerConfig
from .errors import InvalidUrl, UnsupportedFileType
from .file_analyzer import FileAnalyzer
from .log_utils import set_log_file
from .models import FileAnalysisResult, UrlAnalysisResult, result_as_dict
from .store import ScanStore
from .url_analyzer import UrlAnalyzer


def build_arg_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--json",
        nargs="?",
        const=True,
        help="Write JSON output (optional path). Defaults to stdout.",
    )
    common.add_argument(
        "--store",
        help="SQLite database to save results in (default: RISKSCAN_STORE_DB).",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose debug logging.",
    )
    common.add_argument(
        "--log-file",
        help="Append log lines to this file instead of stderr.",
    )

    parser = argparse.ArgumentParser(
        description="Heuristic risk triage for files and URLs (a second opinion, not a verdict)."
    )
    commands = parser.add_subparsers(dest="command", required=True)

    file_cmd = commands.add_parser("file", parents=[common], help="Analyze a local file.")
    file_cmd.add_argument("path", help="Path to the file to analyze.")
    file_cmd.add_argument(
        "--name",
        help="Declared file name used for type dispatch (default: the path's base name).",
    )

    url_cmd = commands.add_parser("url", parents=[common], help="Analyze a URL.")
    url_cmd.add_argument("url", help="URL to analyze; https:// is assumed when missing.")
    url_cmd.add_argument(
        "--offline",
        action="store_true",
        help="Skip domain age, DNS and page content checks.",
    )

    show_cmd = commands.add_parser("show", parents=[common], help="Print a stored result.")
    show_cmd.add_argument("scan_id", help="Identifier printed when the result was stored.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    set_log_file(args.log_file)

    config = AnalyzerConfig.from_env()
    store_path = args.store or config.store_db

    if args.command == "show":
        if not store_path:
            parser.error("show needs --store or RISKSCAN_STORE_DB.")
        record = ScanStore(store_path).get(args.scan_id)
        if record is None:
            sys.stderr.write(f"No stored result with id {args.scan_id}\n")
            return 1
        sys.stdout.write(json.dumps(record, indent=2) + "\n")
        return 0

    try:
        result = _run(args, config)
    except (UnsupportedFileType, InvalidUrl, OSError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    if store_path:
        scan_id = ScanStore(store_path).save(result)
        sys.stderr.write(f"Stored result {scan_id}\n")

    output = result_as_dict(result)
    if args.json:
        serialized = json.dumps(output, indent=2)
        if isinstance(args.json, str):
            with open(args.json, "w", encoding="utf-8") as handle:
                handle.write(serialized)
        else:
            sys.stdout.write(serialized + "\n")
    else:
        sys.stdout.write(format_text_report(result))
    return 0


def _run(args: argparse.Namespace, config: AnalyzerConfig) -> FileAnalysisResult | UrlAnalysisResult:
    if args.command == "file":
        size = os.path.getsize(args.path)
        if size > config.max_file_size:
            raise OSError(f"{args.path} is {size} bytes, over the {config.max_file_size} byte limit")
        return FileAnalyzer(config, verbose=args.verbose).analyze_path(args.path, args.name)

    if args.offline:
        config = dataclasses.replace(config, network_checks=False)
    return UrlAnalyzer(config, verbose=args.verbose).analyze(args.url)


def format_text_report(result: FileAnalysisResult | UrlAnalysisResult) -> str:
    lines: list[str] = []
    if isinstance(result, FileAnalysisResult):
        meta = result.metadata
        lines.append(f"File: {meta.original_name} ({meta.size} bytes, {meta.mime_type})")
        lines.append(f"SHA256: {meta.hashes.sha256}")
        lines.append(f"Risk: {result.risk_level} ({result.risk_score}/100)")
        findings, advice = result.signals, result.next_steps
        advice_title = "Next steps"
    else:
        lines.append(f"URL: {result.normalized_url}")
        lines.append(
            f"Classification: {result.classification} "
            f"(score {result.score}/100, confidence {result.confidence}/100)"
        )
        findings, advice = result.reasons, result.tips
        advice_title = "Tips"

    lines.append("Signals:" if findings else "Signals: none")
    for item in findings:
        lines.append(f"  [{item.risk_level}] {item.title} ({item.weight:+d}): {item.evidence}")
    lines.append(f"{advice_title}:")
    for step in advice:
        lines.append(f"  - {step}")
    return "\n".join(lines) + "\n"


if __name__ == "__main__":
    raise SystemExit(main())
