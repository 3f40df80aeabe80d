#!/usr/bin/env python3
"""
Run one analysis tool from the shell and print the result as JSON.

    python scripts/run_tool.py backlink-checker https://example.com
    python scripts/run_tool.py rank-tracker example.com --param keywords='["seo tools"]'
"""
import sys
import json
import argparse
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv
from seo_toolbox.config import get_settings
from seo_toolbox.errors import ConfigurationError, InputError
from seo_toolbox.log import setup_logging
from seo_toolbox.pipeline.run import pipeline
from seo_toolbox.tools import TOOLS, get_tool


def parse_param(raw: str):
    key, _, value = raw.partition("=")
    try:
        return key, json.loads(value)
    except ValueError:
        return key, value


def main():
    parser = argparse.ArgumentParser(description="Run an SEO analysis tool")
    parser.add_argument("tool", choices=sorted(TOOLS))
    parser.add_argument("subject", help="URL, domain or keyword")
    parser.add_argument("--vendor", choices=["gemini", "openai"], default=None)
    parser.add_argument("--param", action="append", default=[], help="key=value (value may be JSON)")
    args = parser.parse_args()

    load_dotenv()
    setup_logging()
    settings = get_settings()
    vendor = args.vendor or settings.DEFAULT_VENDOR

    try:
        result = pipeline.run(
            get_tool(args.tool),
            args.subject,
            vendor=vendor,
            credential=settings.credential_for(vendor),
            params=dict(parse_param(p) for p in args.param),
        )
    except (InputError, ConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    print(result.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
