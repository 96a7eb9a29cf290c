"""Command-line entrypoint: generate one outfit suggestion and print it."""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from stilo_app.app import StiloApp
from stilo_app.logging_config import redact_for_log
from logic.errors import GenerationFailure
from models.taxonomy import Gender, Occasion, StylePreference


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ask the Stilo stylist for an outfit.")
    parser.add_argument("occasion", choices=[occasion.value for occasion in Occasion])
    parser.add_argument(
        "--style",
        default=StylePreference.CLASSIC.value,
        choices=[style.value for style in StylePreference],
    )
    parser.add_argument(
        "--gender",
        default=Gender.UNISEX.value,
        choices=[gender.value for gender in Gender],
    )
    parser.add_argument("--location", help="Use mock weather for this place")
    parser.add_argument("--share", action="store_true", help="Also print a shareable link")
    return parser


def main(argv: Optional[List[str]] = None, app: StiloApp | None = None) -> int:
    args = build_parser().parse_args(argv)
    app = app or StiloApp()
    try:
        suggestion = asyncio.run(
            app.suggest_outfit(
                args.occasion,
                gender=args.gender,
                style_preference=args.style,
                location=args.location,
            )
        )
    except GenerationFailure as exc:
        print(f"Could not generate an outfit: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Invalid request: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(redact_for_log(suggestion.to_dict()), indent=2))
    if args.share:
        print(app.share_url(suggestion))
    return 0


if __name__ == "__main__":
    sys.exit(main())
