"""
webcompare - Main Entry Point

Checks a page against stored element snapshots and prints the descriptors
whose value changed, or captures fresh snapshot values for a descriptor file.

Usage:
    python main.py compare https://example.com monitors.json
    python main.py compare --static page.html monitors.json --output changes.json
    python main.py capture https://example.com monitors.json --output baseline.json
"""

import asyncio
import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from webcompare.browser.controller import PlaywrightRenderer
from webcompare.browser.page import PageRenderer
from webcompare.browser.static import StaticHtmlRenderer
from webcompare.comparison.evaluator import BatchEvaluator
from webcompare.config.settings import settings
from webcompare.exceptions import WebCompareError
from webcompare.service import capture_snapshot, run_comparison
from webcompare.utils.logger import compare_logger as logger


EXIT_UNCHANGED = 0
EXIT_CHANGED = 1
EXIT_ERROR = 2


def load_descriptors(path: Path) -> list[dict]:
    """Read a JSON array of monitor descriptors."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise WebCompareError(f"{path} must contain a JSON array of descriptors")
    return data


def write_output(data, output: Optional[Path]):
    """Write JSON to a file, or to stdout when no file is given."""
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if output:
        output.write_text(text + "\n", encoding="utf-8")
        logger.show_json(data, title=str(output))
        logger.info(f"Wrote {output}")
    else:
        print(text)


def build_renderer(args: argparse.Namespace) -> PageRenderer:
    if args.static:
        return StaticHtmlRenderer()
    return PlaywrightRenderer(
        headless=not args.headed,
        executable_path=args.executable_path,
        timeout_ms=args.timeout_ms,
    )


async def run_compare(args: argparse.Namespace) -> int:
    logger.banner("webcompare: compare")
    logger.info(f"URL: {args.url}")

    descriptors = load_descriptors(args.descriptors)
    evaluator = BatchEvaluator(
        max_concurrency=args.concurrency,
        isolate_failures=True if args.isolate_failures else None,
    )

    run = await run_comparison(
        args.url,
        descriptors,
        renderer=build_renderer(args),
        evaluator=evaluator,
        timeout_ms=args.run_timeout_ms,
    )

    for report in run.mismatches:
        logger.mismatch(report)
    logger.run_summary(run.url, run.evaluated, len(run.mismatches), len(run.failures), run.duration_ms)

    if run.failures:
        write_output(run.to_dict(), args.output)
    else:
        write_output([report.to_wire() for report in run.mismatches], args.output)

    if run.changed:
        return EXIT_CHANGED
    if run.failures:
        return EXIT_ERROR

    logger.success("No changes detected")
    return EXIT_UNCHANGED


async def run_capture(args: argparse.Namespace) -> int:
    logger.banner("webcompare: capture")
    logger.info(f"URL: {args.url}")

    descriptors = load_descriptors(args.descriptors)
    snapshot = await capture_snapshot(
        args.url,
        descriptors,
        renderer=build_renderer(args),
        timeout_ms=args.run_timeout_ms,
    )

    write_output([descriptor.to_wire() for descriptor in snapshot], args.output)
    return EXIT_UNCHANGED


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="webcompare - detect changes in rendered web content",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py compare https://example.com monitors.json
  python main.py compare --static ./page.html monitors.json
  python main.py capture https://example.com monitors.json -o baseline.json
        """
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    compare = subparsers.add_parser("compare", help="Report descriptors whose value changed")
    capture = subparsers.add_parser("capture", help="Record the current value of every descriptor")

    for sub in (compare, capture):
        sub.add_argument("url", help="Page URL (or a local file with --static)")
        sub.add_argument("descriptors", type=Path, help="JSON file with the monitor descriptors")
        sub.add_argument(
            "--output", "-o",
            type=Path,
            default=None,
            help="Write the JSON result to this file instead of stdout"
        )
        sub.add_argument(
            "--static",
            action="store_true",
            help="Parse the markup as-is instead of rendering it in Chromium"
        )
        sub.add_argument(
            "--headed",
            action="store_true",
            help="Show the browser window"
        )
        sub.add_argument(
            "--executable-path",
            type=str,
            default=None,
            help="Chromium executable to use"
        )
        sub.add_argument(
            "--timeout-ms",
            type=int,
            default=None,
            help=f"Navigation timeout (default: {settings.browser.timeout_ms})"
        )
        sub.add_argument(
            "--run-timeout-ms",
            type=int,
            default=None,
            help="Upper bound for the whole run, page load included"
        )

    compare.add_argument(
        "--concurrency", "-c",
        type=int,
        default=None,
        help=f"Descriptors evaluated at once (default: {settings.engine.max_concurrency})"
    )
    compare.add_argument(
        "--isolate-failures",
        action="store_true",
        help="Report failing descriptors instead of aborting the run"
    )

    return parser


def main(argv: list[str] = None) -> int:
    """Main entry point with argument parsing."""
    parser = build_parser()
    args = parser.parse_args(argv)

    handler = run_compare if args.command == "compare" else run_capture

    try:
        return asyncio.run(handler(args))
    except WebCompareError as e:
        logger.error(str(e), exception=e)
        return EXIT_ERROR
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"I/O error: {e}", exception=e)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
