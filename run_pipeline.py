import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from asset_pipeline.config import load_settings
from asset_pipeline.core import AssetSerializer
from asset_pipeline.log import configure_logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Copy static assets and transcode configured image folders for the site build."
    )
    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="Path to the JSON settings file (paths and content sources).",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Directory that relative paths in the settings are resolved against "
        "(defaults to the current working directory).",
    )
    parser.add_argument(
        "--env",
        default=None,
        help="Environment mode, e.g. PRODUCTION. Overrides ASSET_PIPELINE_ENV and the settings file.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"],
        help="Minimum log level written to stderr.",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    # Load environment variables from a local .env file if present
    # (e.g. ASSET_PIPELINE_ENV=PRODUCTION).
    load_dotenv()

    args = parse_args(argv)
    configure_logging(args.log_level)

    settings = load_settings(args.config, root=args.root, env=args.env)
    report = AssetSerializer(settings).run()

    logger.info(
        f"Processed {len(report.processed)} image(s) across {len(report.sources)} source(s)"
    )
    if not report.ok:
        for path in report.failed_paths:
            logger.error(f"Failed: {path}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
