"""
Channel-centric models: configured channel groups and freshly fetched feeds.

These objects live for a single aggregation run.
"""

from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class ChannelGroup(BaseModel):
    """One owner's set of feed URLs, as read from a configuration fragment."""

    model_config = ConfigDict(extra="ignore")

    owner: str = Field(..., description="Owner id")
    channels: list[str] = Field(default_factory=list, description="Feed URLs")

    @field_validator("channels", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        return [] if v is None else v


ChannelGroups = TypeAdapter(list[ChannelGroup])


@dataclass
class FeedItem:
    """One article as it appears in a fetched feed."""

    title: str = ""
    link: str = ""
    desc: str = ""
    date: str = ""

    def strip(self) -> None:
        self.title = self.title.strip()
        self.link = self.link.strip()
        self.desc = self.desc.strip()
        self.date = self.date.strip()


@dataclass
class FeedChannel:
    """One fetched feed, tagged with the owner whose URL produced it."""

    title: str = ""
    desc: str = ""
    items: list[FeedItem] = field(default_factory=list)
    owner: Optional[str] = None

    def strip(self) -> None:
        """Trim whitespace from the channel and all of its items."""
        self.title = self.title.strip()
        self.desc = self.desc.strip()
        for item in self.items:
            item.strip()
