"""Run statistics reported at the end of a backfill."""

from pydantic import BaseModel


class ChannelStats(BaseModel):
    """Counters for one scanned channel."""

    channel_id: str
    name: str = ""
    messages_with_links: int = 0
    saved: int = 0
    failed: int = 0
    error: str = ""  # Why the scan stopped early, empty when the backlog was read to the end


class ScanStats(BaseModel):
    """Run-level counters aggregated across channels."""

    channels: list[ChannelStats] = []
    skipped_channels: list[str] = []

    @property
    def messages_with_links(self) -> int:
        return sum(c.messages_with_links for c in self.channels)

    @property
    def saved(self) -> int:
        return sum(c.saved for c in self.channels)

    @property
    def failed(self) -> int:
        return sum(c.failed for c in self.channels)
