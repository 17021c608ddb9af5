# SPDX-License-Identifier: MIT
"""
KeyHunter - Command Line Interface

This CLI provides:
- keyhunter version
- keyhunter scan <root> --format {text,json,sarif} --config <path> --strict
- keyhunter scan-url <url> --format {text,json,sarif}
- keyhunter init [root] [--force]
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .core.exceptions import KeyHunterConfigError, ScanError
from .risk.score import RiskLevel, risk_summary

FAIL_ON_LEVELS = {
    "never": (),
    "medium": (RiskLevel.MEDIUM, RiskLevel.HIGH),
    "high": (RiskLevel.HIGH,),
}


def _add_output_options(sp):
    sp.add_argument(
        "--format",
        choices=["text", "json", "sarif"],
        default="text",
        help="output format (default: text)"
    )
    sp.add_argument(
        "--config",
        help="path to scanner config YAML file"
    )
    sp.add_argument(
        "--strict",
        action="store_true",
        help="drop the broad Cohere/AI21/Azure OpenAI patterns"
    )
    sp.add_argument(
        "--json-out",
        dest="json_out",
        help="write JSON results to file"
    )
    sp.add_argument(
        "--sarif-out",
        dest="sarif_out",
        help="write SARIF results to file"
    )
    sp.add_argument(
        "--fail-on",
        choices=sorted(FAIL_ON_LEVELS),
        default="never",
        help="exit 1 when the risk level reaches this tier (default: never)"
    )
    sp.add_argument("--verbose", action="store_true", help="enable debug logging")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    p = argparse.ArgumentParser(prog="keyhunter", description="KeyHunter API key and secret scanner")
    p.add_argument("-v", "--version", action="store_true", help="print version and exit")

    sub = p.add_subparsers(dest="cmd")
    sub.add_parser("version", help="print version")

    sp = sub.add_parser("scan", help="scan a directory")
    sp.add_argument("root", nargs="?", default=".", help="directory to scan")
    _add_output_options(sp)

    up = sub.add_parser("scan-url", help="fetch and scan a single web page")
    up.add_argument("url", help="http:// or https:// URL to scan")
    _add_output_options(up)

    ip = sub.add_parser("init", help="write a default .keyhunter.yml")
    ip.add_argument("root", nargs="?", default=".", help="directory to write the config into")
    ip.add_argument("--force", action="store_true", help="overwrite an existing config file")

    args = p.parse_args(argv)

    if args.version or args.cmd == "version":
        print(__version__)
        return 0

    if args.cmd == "init":
        return handle_init_command(args)

    if args.cmd in ("scan", "scan-url"):
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="[keyhunter] %(levelname)s %(name)s: %(message)s",
        )
        return handle_scan_command(args)

    p.print_help()
    return 0


def handle_init_command(args):
    """Write the default config template into the target directory."""
    from .scanner.config import CONFIG_FILENAMES, create_default_config_template

    root = Path(args.root)
    if not root.is_dir():
        print(f"Error: Directory does not exist: {root}", file=sys.stderr)
        return 1

    target = root / CONFIG_FILENAMES[0]
    if target.exists() and not args.force:
        print(f"Error: {target} already exists (use --force to overwrite)", file=sys.stderr)
        return 1

    target.write_text(create_default_config_template(), encoding="utf-8")
    print(f"Wrote {target}")
    return 0


def handle_scan_command(args):
    """Handle the scan and scan-url subcommands."""
    from .scanner import scan_directory, scan_url
    from .scanner.config import load_scanner_config

    try:
        repo_root = args.root if args.cmd == "scan" else "."
        config = load_scanner_config(args.config, repo_root=repo_root)
    except KeyHunterConfigError as e:
        print(f"CONFIG ERROR: {e}", file=sys.stderr)
        return 1

    if args.strict:
        config["broad_patterns"] = False

    try:
        if args.cmd == "scan":
            report = scan_directory(args.root, config)
        else:
            report = scan_url(args.url, config)
    except ScanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    scan_results = report.to_dict()

    if args.json_out:
        Path(args.json_out).write_text(json.dumps(scan_results, indent=2))
        if args.format == "text":
            print(f"JSON output written to {args.json_out}")

    if args.sarif_out:
        Path(args.sarif_out).write_text(json.dumps(_sarif(report), indent=2))
        if args.format == "text":
            print(f"SARIF output written to {args.sarif_out}")

    if args.format == "json":
        print(json.dumps(scan_results, indent=2))
    elif args.format == "sarif":
        print(json.dumps(_sarif(report), indent=2))
    else:
        print_text_summary(report)

    if report.risk_level in FAIL_ON_LEVELS[args.fail_on]:
        return 1
    return 0


def _sarif(report):
    from .sarif.export import build_sarif

    return build_sarif(report)


def print_text_summary(report):
    """Print a text summary of scan results."""
    summary = report.summary
    risk = risk_summary(report)

    print("\n🔍 KeyHunter Scan Results")
    print("=" * 50)
    print(f"Target: {summary.target.location}")
    print(f"Files scanned: {summary.total_files_scanned}")
    print(f"Total issues: {summary.total_issues}")
    print(f"Risk level: {summary.risk_level.value}")
    print(f"Duration: {summary.duration_seconds:.2f}s")

    if report.api_keys:
        print("\n🔑 API keys:")
        for f in report.api_keys:
            print(f"  {f.file}:{f.line}  {f.service}")

    if report.sensitive_files:
        print("\n📄 Sensitive files:")
        for f in report.sensitive_files:
            print(f"  {f.file}  {f.issue}")

    if report.code_issues:
        print("\n⚠️  Code issues:")
        for f in report.code_issues:
            print(f"  {f.file}:{f.line}  {f.pattern}")

    if report.errors:
        print(f"\nUnreadable files: {len(report.errors)}")
        for e in report.errors[:3]:  # Show first 3 errors
            print(f"    - {e.file}: {e.error}")
        if len(report.errors) > 3:
            print(f"    ... and {len(report.errors) - 3} more")

    breakdown = risk["breakdown"]
    print(
        "\nBreakdown: "
        f"{breakdown['api_keys']} api keys, "
        f"{breakdown['sensitive_files']} sensitive files, "
        f"{breakdown['code_issues']} code issues"
    )


if __name__ == "__main__":
    raise SystemExit(main())
