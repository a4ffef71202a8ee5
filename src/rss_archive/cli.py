"""
Command line entry point.

    rss-archive --base-dir /srv/rss

reads fragments from ``<base>/data/channels`` and writes day records to
``<base>/data/items``.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import yaml

from rss_archive.config import ArchiveConfig, get_config, load_config_from_yaml, set_config
from rss_archive.core.pipeline import ArchivePipeline
from rss_archive.errors import RssArchiveError, SetupError
from rss_archive.logger import get_logger, setup_logger

logger = get_logger(__name__)


def _require_dir(path: Path, label: str) -> None:
    if not path.exists():
        raise SetupError(f"{label} not exists: {path}")
    if not path.is_dir():
        raise SetupError(f"{label} not a dir: {path}")


def prepare_layout(base_dir: str, archive: ArchiveConfig) -> tuple[Path, Path]:
    """Validate the directory layout and create the output directory if needed.

    Returns:
        (channels directory, items directory)

    Raises:
        SetupError: A required directory is missing or not a directory
    """
    _require_dir(Path(base_dir), "Base dir")

    data_dir = archive.data_path(base_dir)
    _require_dir(data_dir, "Data dir")

    channels_dir = archive.channels_path(base_dir)
    _require_dir(channels_dir, "Input dir")

    items_dir = archive.items_path(base_dir)
    if not items_dir.exists():
        try:
            items_dir.mkdir()
        except OSError as e:
            raise SetupError(f"Unable to create dir '{items_dir}': {e}") from e
    if not items_dir.is_dir():
        raise SetupError(f"Output dir not a dir: {items_dir}")

    return channels_dir, items_dir


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rss-archive",
        description="Fetch RSS feeds and merge their items into per-day records",
    )
    parser.add_argument("--base-dir", "--base_dir", dest="base_dir", default=None,
                        help="Base directory holding data/channels and data/items")
    parser.add_argument("--config", default=None, help="YAML configuration file")
    parser.add_argument("--log-level", default=None, help="Override the log level")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one aggregation; returns the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        config = set_config(load_config_from_yaml(args.config)) if args.config else get_config()
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"[ERR] Unable to load configuration: {e}")
        return 1

    setup_logger(level=args.log_level)

    base_dir = args.base_dir or config.archive.base_dir

    try:
        channels_dir, items_dir = prepare_layout(base_dir, config.archive)
        summary = ArchivePipeline(items_dir).run(channels_dir)
    except RssArchiveError as e:
        logger.error(str(e))
        print(f"[ERR] {e}")
        return 1

    logger.info(
        f"Fetched {summary.fetch_stats.successful_fetches}/{summary.urls} urls, "
        f"wrote {len(summary.days)} days"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
