"""
HarborBot - Bot Context
=======================

Process-wide state owned by the bot instance.

DESIGN:
    Everything that would otherwise be a module global (record store,
    authoring sessions, component router, ticket workflow) hangs off one
    BotContext created in HarborBot.__init__. Cogs and services read it
    through bot.ctx, and tests build their own with any backend.
"""

from dataclasses import dataclass, field
from typing import Optional

from src.core.config import Config, get_config
from src.core.database import Store, get_db
from src.services.embeds.sessions import EmbedSessionStore
from src.services.tickets.workflow import TicketWorkflow
from src.utils.router import InteractionRouter


@dataclass
class BotContext:
    config: Config
    db: Store
    embed_sessions: EmbedSessionStore = field(default_factory=EmbedSessionStore)
    router: InteractionRouter = field(default_factory=InteractionRouter)
    tickets: Optional[TicketWorkflow] = None

    def __post_init__(self) -> None:
        if self.tickets is None:
            self.tickets = TicketWorkflow(self.db)

    @classmethod
    def from_environment(cls) -> "BotContext":
        """Context from get_config() and the store selected by get_db()."""
        return cls(config=get_config(), db=get_db())


__all__ = ["BotContext"]
