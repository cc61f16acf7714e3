"""Chat message model, decoupled from the Discord SDK types."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Author(BaseModel):
    """Message author with the automated-account flag."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    bot: bool = False


class RawMessage(BaseModel):
    """A backlog message as fetched from a channel. Never mutated."""

    model_config = ConfigDict(frozen=True)

    id: str
    content: str
    author: Author
    created_at: datetime  # Timezone-aware, UTC from Discord
    channel_id: str
