"""
Channel configuration loading.

A configuration fragment is a JSON array of ``{"owner": ..., "channels": [...]}``
objects. Fragments are concatenated, then merged so that every owner appears
once with a sorted, duplicate-free list of feed URLs.
"""

from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from pydantic import ValidationError

from rss_archive.config import get_config
from rss_archive.errors import ConfigLoadError, UnsortedInputError
from rss_archive.logger import get_logger
from rss_archive.models import ChannelGroup, ChannelGroups

logger = get_logger(__name__)


def merge_channel_groups(groups: Iterable[ChannelGroup]) -> list[ChannelGroup]:
    """Merge groups sharing an owner and deduplicate each owner's URLs.

    Merging is keyed on the owner id, so the input may come in any order.

    Args:
        groups: Channel groups in fragment order

    Returns:
        One group per owner, sorted by owner, URLs sorted and unique
    """
    by_owner: dict[str, list[str]] = {}
    for group in groups:
        by_owner.setdefault(group.owner, []).extend(group.channels)

    merged = [
        ChannelGroup(owner=owner, channels=sorted(set(urls)))
        for owner, urls in sorted(by_owner.items())
    ]

    ensure_canonical(merged)
    return merged


def ensure_canonical(groups: list[ChannelGroup]) -> None:
    """Check that owners are strictly increasing and so are each owner's URLs.

    Raises:
        UnsortedInputError: On the first pair out of order (or repeated)
    """
    for previous, current in zip(groups, groups[1:]):
        if previous.owner >= current.owner:
            raise UnsortedInputError(
                f"Owner {current.owner!r} follows {previous.owner!r}"
            )

    for group in groups:
        for previous, current in zip(group.channels, group.channels[1:]):
            if previous >= current:
                raise UnsortedInputError(
                    f"Channel {current!r} follows {previous!r} for owner {group.owner!r}"
                )


class ChannelLoader:
    """Reads configuration fragments and merges them into channel groups."""

    def __init__(self, fragment_suffix: Optional[str] = None):
        """Initialize channel loader.

        Args:
            fragment_suffix: Only files with this suffix are read from a directory
        """
        self.fragment_suffix = fragment_suffix or get_config().archive.fragment_suffix
        self.channel_groups: list[ChannelGroup] = []

    def load(self, path: Union[str, Path]) -> list[ChannelGroup]:
        """Load every fragment under ``path`` and merge them.

        Args:
            path: A fragment file, or a directory of fragment files

        Returns:
            Merged channel groups (also kept on ``self.channel_groups``)

        Raises:
            ConfigLoadError: A fragment is missing, unreadable or invalid
            UnsortedInputError: The merged groups are not in canonical order
        """
        groups: list[ChannelGroup] = []
        for fragment in self.discover(path):
            groups.extend(self.read_fragment(fragment))

        self.channel_groups = merge_channel_groups(groups)

        logger.info(
            f"Loaded {len(self.channel_groups)} owners with "
            f"{sum(len(g.channels) for g in self.channel_groups)} channels from {path}"
        )
        return self.channel_groups

    def discover(self, path: Union[str, Path]) -> list[Path]:
        """List the fragment files under ``path``, in lexical order.

        Directories are not descended into; files without the fragment
        suffix are ignored.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigLoadError(f"Configuration path not found: {path}")

        if not path.is_dir():
            return [path]

        try:
            entries = sorted(path.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise ConfigLoadError(f"Error reading '{path}': {e}") from e

        fragments = []
        for entry in entries:
            if entry.is_dir():
                continue
            if not entry.name.endswith(self.fragment_suffix):
                logger.debug(f"Skipping non-fragment file: {entry}")
                continue
            fragments.append(entry)

        return fragments

    def read_fragment(self, path: Path) -> list[ChannelGroup]:
        """Decode one fragment file."""
        try:
            content = path.read_bytes()
        except OSError as e:
            raise ConfigLoadError(f"Error reading '{path}': {e}") from e

        try:
            return ChannelGroups.validate_json(content)
        except ValidationError as e:
            raise ConfigLoadError(f"Error decoding '{path}': {e}") from e

    def iter_channels(self) -> Iterator[tuple[str, str]]:
        """Yield ``(owner, url)`` for every loaded channel, in canonical order."""
        for group in self.channel_groups:
            for url in group.channels:
                yield group.owner, url
