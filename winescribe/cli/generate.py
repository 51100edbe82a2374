"""Standalone CLI for generating a wine blog post.

Usage::

    python -m winescribe.cli.generate --wine-name "Chateau Test" --vintage 2020
    python -m winescribe.cli.generate --prompt "부르고뉴 피노 누아..." --length detailed
    python -m winescribe.cli.generate --wine-name "Opus One" --json -o post.json

Runs the same pipeline as ``POST /api/generate`` (fact extraction,
grounded generation, verification and the optional correction pass) and
prints the finished post, contact footer included, to stdout.  Log output
always goes to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from winescribe.models.generation import GeneratedContent, GenerationRequest
from winescribe.utils.errors import WinescribeError
from winescribe.utils.logging import configure_logging

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _format_text_output(result: GeneratedContent) -> str:
    return result.content


def _format_json_output(result: GeneratedContent) -> str:
    """Serialize the full result, including facts and the verifier's verdict."""
    return json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2)


def _request_from_args(args: argparse.Namespace) -> GenerationRequest:
    return GenerationRequest(
        prompt=args.prompt,
        wine_name=args.wine_name,
        region=args.region,
        vintage=args.vintage,
        variety=args.variety,
        highlights=args.highlights or [],
        length=args.length,
        model=args.model,
    )


# ---------------------------------------------------------------------------
# Pipeline runner
# ---------------------------------------------------------------------------


async def _run(
    request: GenerationRequest,
    json_output: bool,
    output_file: str | None,
    quiet: bool,
) -> int:
    """Build the pipeline, run it and write the result.

    Returns 0 on success, 1 on a rejected request or a pipeline failure.
    """
    # Deferred import: winescribe.main reads settings and configures logging
    # for the server, so the CLI logging setup has to come after it.
    from winescribe.main import build_pipeline, settings

    # stdout carries the post; every log line goes to stderr.
    configure_logging(log_level="WARNING" if quiet else settings.log_level, stream=sys.stderr)

    pipeline = build_pipeline()
    try:
        result = await pipeline.run(request)
    except WinescribeError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    rendered = _format_json_output(result) if json_output else _format_text_output(result)
    if output_file:
        Path(output_file).write_text(rendered, encoding="utf-8")
        print(f"Wrote {len(rendered):,} characters to {output_file}", file=sys.stderr)
    else:
        print(rendered)
    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m winescribe.cli.generate",
        description=(
            "Generate a Korean wine marketing blog post from a description "
            "or structured wine details."
        ),
    )
    parser.add_argument("--prompt", "-p", default=None, help="Free-text wine description.")
    parser.add_argument("--wine-name", default=None, help="Wine name, e.g. 'Chateau Margaux'.")
    parser.add_argument("--region", default=None, help="Production region.")
    parser.add_argument("--vintage", default=None, help="Vintage year.")
    parser.add_argument("--variety", default=None, help="Grape variety.")
    parser.add_argument(
        "--highlight",
        action="append",
        dest="highlights",
        default=None,
        help="Point to emphasize; repeat for several.",
    )
    parser.add_argument(
        "--length",
        choices=["short", "normal", "detailed"],
        default="normal",
        help="Output length tier (default: normal).",
    )
    parser.add_argument(
        "--model",
        default=None,
        help="Model identifier, e.g. gpt-5-mini. Unknown values use the provider default.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output the full result (facts, verdict, usage) as JSON.",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Write the result to a file instead of stdout.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point; returns the process exit code."""
    args = _build_parser().parse_args(argv)
    request = _request_from_args(args)
    if not request.has_subject():
        print("Error: --prompt 또는 --wine-name 중 하나는 필요합니다.", file=sys.stderr)
        return 2

    return asyncio.run(_run(request, args.json_output, args.output, args.quiet))


if __name__ == "__main__":
    sys.exit(main())
