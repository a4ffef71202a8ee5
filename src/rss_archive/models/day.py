"""
Date-centric models: the persisted record for one calendar day.

Field names and order match the on-disk JSON layout::

    {"date": ..., "owners": [{"id": ..., "channels": [{"title": ..., "desc": ...,
        "items": [{"title": ..., "link": ..., "desc": ...}]}]}]}

The raw publication date of an item is not persisted.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ArchivedItem(_Record):
    """One article kept for a day."""

    title: str = ""
    link: str = ""
    desc: str = ""


class DayChannel(_Record):
    """One feed's articles for a day and owner."""

    title: str = ""
    desc: str = ""
    items: list[ArchivedItem] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        return [] if v is None else v

    def sort(self) -> None:
        self.items.sort(key=lambda item: item.title)


class Owner(_Record):
    """One owner's channels for a day."""

    id: str
    channels: list[DayChannel] = Field(default_factory=list)

    @field_validator("channels", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        return [] if v is None else v

    def sort(self) -> None:
        self.channels.sort(key=lambda channel: channel.title)
        for channel in self.channels:
            channel.sort()


class Day(_Record):
    """Everything archived for one UTC calendar day."""

    date: str
    owners: list[Owner] = Field(default_factory=list)

    @field_validator("owners", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        return [] if v is None else v

    def sort(self) -> None:
        """Put owners, channels and items in canonical order, in place."""
        self.owners.sort(key=lambda owner: owner.id)
        for owner in self.owners:
            owner.sort()

    @property
    def item_count(self) -> int:
        return sum(len(channel.items) for owner in self.owners for channel in owner.channels)
