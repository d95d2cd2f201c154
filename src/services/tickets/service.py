"""
HarborBot - Ticket Service
==========================

Discord side of the ticket system.

DESIGN:
    TicketWorkflow decides whether a transition happens and records it.
    TicketService only runs after a successful transition and mirrors it
    onto Discord: channel creation, permission overwrites, channel
    messages and the guild's ticket logs channel. Discord failures while
    mirroring are logged; the stored state stays authoritative.
"""

import random
import re
from typing import TYPE_CHECKING, Optional, Tuple

import discord

from src.core.logger import logger
from src.core.config import has_mod_role
from src.core.database import DatabaseError, TicketSettingsRecord
from src.utils.interaction import send_to_channel

from .embeds import (
    build_welcome_embed,
    build_closed_embed,
    build_created_log_embed,
    build_closed_log_embed,
    build_event_log_embed,
)
from .transcript import create_transcript_file
from .views import TicketControlView, ClosedTicketView
from .workflow import (
    TicketWorkflow,
    TransitionResult,
    NOT_A_TICKET,
    ALREADY_CLOSED,
    ALREADY_CLAIMED_SELF,
    ALREADY_ADDED,
    NOT_IN_TICKET,
    CANNOT_REMOVE_CREATOR,
    INVALID_NAME,
)

if TYPE_CHECKING:
    from src.bot import HarborBot


NOT_SET_UP = "The ticket system has not been set up on this server."
CATEGORY_NOT_FOUND = (
    "The ticket category could not be found. "
    "Please ask an admin to set up the ticket system properly."
)

_USERNAME_STRIP = re.compile(r"[^a-z0-9]")


def ticket_channel_name(username: str) -> str:
    """ticket-<alphanumeric username>-<1000..9999>."""
    clean = _USERNAME_STRIP.sub("", username.lower())
    return f"ticket-{clean}-{random.randint(1000, 9999)}"


def _lookup(guild: discord.Guild, value: Optional[str], pool) -> Optional[discord.abc.GuildChannel]:
    """Find a channel stored either as an id or as a name."""
    if not value:
        return None
    if str(value).isdigit():
        channel = guild.get_channel(int(value))
        if channel is not None:
            return channel
    return discord.utils.get(pool, name=str(value))


class TicketService:
    """Creates, updates and tears down ticket channels."""

    def __init__(self, bot: "HarborBot") -> None:
        self.bot = bot

    @property
    def workflow(self) -> TicketWorkflow:
        return self.bot.ctx.tickets

    @property
    def db(self):
        return self.bot.ctx.db

    # =========================================================================
    # Lookups
    # =========================================================================

    def get_settings(self, guild_id: int) -> Optional[TicketSettingsRecord]:
        return self.db.get_ticket_settings(guild_id)

    def find_category(
        self,
        guild: discord.Guild,
        settings: TicketSettingsRecord,
    ) -> Optional[discord.CategoryChannel]:
        channel = _lookup(guild, settings.get("category"), guild.categories)
        return channel if isinstance(channel, discord.CategoryChannel) else None

    def find_logs_channel(
        self,
        guild: discord.Guild,
        settings: Optional[TicketSettingsRecord],
    ) -> Optional[discord.TextChannel]:
        if not settings:
            return None
        channel = _lookup(guild, settings.get("logs_channel"), guild.text_channels)
        return channel if isinstance(channel, discord.TextChannel) else None

    async def send_log(self, guild: discord.Guild, embed: discord.Embed) -> None:
        settings = self.get_settings(guild.id)
        await send_to_channel(self.find_logs_channel(guild, settings), embed=embed)

    # =========================================================================
    # Open
    # =========================================================================

    async def open_ticket(
        self,
        guild: discord.Guild,
        user: discord.Member,
        ticket_type: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> Tuple[TransitionResult, Optional[discord.TextChannel]]:
        """
        Create the ticket channel and record the ticket.

        Returns:
            (result, channel). channel is None when nothing was created.
        """
        settings = self.get_settings(guild.id)
        if settings is None:
            return TransitionResult(False, NOT_SET_UP), None

        category = self.find_category(guild, settings)
        if category is None:
            return TransitionResult(False, CATEGORY_NOT_FOUND), None

        types = settings.get("ticket_types") or []
        ticket_type = ticket_type or (types[0]["name"] if types else "General Support")
        reason = reason or "No reason provided"

        read_write = discord.PermissionOverwrite(
            view_channel=True, send_messages=True, read_message_history=True,
        )
        overwrites = {
            guild.default_role: discord.PermissionOverwrite(view_channel=False),
            user: read_write,
            guild.me: discord.PermissionOverwrite(
                view_channel=True, send_messages=True,
                read_message_history=True, manage_channels=True,
            ),
        }
        staff_roles = [guild.get_role(int(r)) for r in settings.get("staff_roles") or []]
        staff_roles = [r for r in staff_roles if r is not None]
        for role in staff_roles:
            overwrites[role] = read_write

        channel = await guild.create_text_channel(
            name=ticket_channel_name(user.name),
            category=category,
            overwrites=overwrites,
            topic=f"Ticket for {user} | Type: {ticket_type} | Reason: {reason}"[:1024],
            reason=f"Ticket opened by {user}",
        )

        try:
            result = self.workflow.open_ticket(guild.id, channel.id, user.id, ticket_type, reason)
        except DatabaseError:
            await channel.delete(reason="Ticket could not be recorded")
            raise

        ping = f"<@{user.id}>"
        if staff_roles:
            ping += f" {staff_roles[0].mention}"

        await channel.send(
            content=ping,
            embed=build_welcome_embed(
                result.ticket, user, ticket_type, reason,
                settings.get("welcome_message") or "",
            ),
            view=TicketControlView(),
        )
        await send_to_channel(
            self.find_logs_channel(guild, settings),
            embed=build_created_log_embed(result.ticket, user, ticket_type),
        )

        logger.tree("Ticket Channel Created", [
            ("Ticket ID", result.ticket["id"]),
            ("User", f"{user} ({user.id})"),
            ("Channel", channel.name),
            ("Type", ticket_type),
        ], emoji="🎫")

        return result, channel

    # =========================================================================
    # Claim / Close
    # =========================================================================

    async def claim(self, channel: discord.TextChannel, user: discord.abc.User) -> TransitionResult:
        result = self.workflow.claim(channel.id, user.id)
        if not result.ok:
            return result

        await send_to_channel(channel, embed=build_event_log_embed(
            "Ticket Claimed",
            f"This ticket has been claimed by <@{user.id}>. They will be assisting you.",
        ))
        await self.send_log(channel.guild, build_event_log_embed(
            "Ticket Claimed", f"<@{user.id}> claimed ticket {result.ticket['id']}",
        ))
        return result

    async def close(
        self,
        channel: discord.TextChannel,
        user: discord.abc.User,
        reason: Optional[str] = None,
    ) -> TransitionResult:
        reason = reason or "No reason provided"
        result = self.workflow.close(channel.id, user.id, reason)
        if not result.ok:
            return result

        ticket = result.ticket
        creator = channel.guild.get_member(ticket["user_id"])
        if creator is not None:
            try:
                await channel.set_permissions(
                    creator, view_channel=True, send_messages=False, read_message_history=True,
                )
            except discord.HTTPException as e:
                logger.warning("Ticket Lock Failed", [
                    ("Ticket ID", ticket["id"]),
                    ("Error", str(e)[:100]),
                ])

        await send_to_channel(
            channel,
            embed=build_closed_embed(user, reason),
            view=ClosedTicketView(),
        )
        await self.send_log(channel.guild, build_closed_log_embed(ticket, user, reason))
        return result

    # =========================================================================
    # Participants
    # =========================================================================

    async def add_user(
        self,
        channel: discord.TextChannel,
        member: discord.Member,
        actor: discord.abc.User,
    ) -> TransitionResult:
        result = self.workflow.add_participant(channel.id, member.id, actor.id)
        if not result.ok:
            return result

        await channel.set_permissions(
            member, view_channel=True, send_messages=True, read_message_history=True,
        )
        await send_to_channel(
            channel, content=f"<@{member.id}> has been added to the ticket by <@{actor.id}>.",
        )
        await self.send_log(channel.guild, build_event_log_embed(
            "User Added to Ticket",
            f"<@{actor.id}> added <@{member.id}> to ticket {result.ticket['id']}",
        ))
        return result

    async def remove_user(
        self,
        channel: discord.TextChannel,
        member: discord.Member,
        actor: discord.abc.User,
    ) -> TransitionResult:
        result = self.workflow.remove_participant(channel.id, member.id, actor.id)
        if not result.ok:
            return result

        await channel.set_permissions(member, overwrite=None)
        await send_to_channel(
            channel, content=f"<@{member.id}> has been removed from the ticket by <@{actor.id}>.",
        )
        await self.send_log(channel.guild, build_event_log_embed(
            "User Removed from Ticket",
            f"<@{actor.id}> removed <@{member.id}> from ticket {result.ticket['id']}",
        ))
        return result

    # =========================================================================
    # Rename / Transcript / Delete
    # =========================================================================

    async def rename(
        self,
        channel: discord.TextChannel,
        name: str,
        actor: discord.abc.User,
    ) -> TransitionResult:
        result = self.workflow.rename(channel.id, name, actor.id)
        if not result.ok:
            return result

        new_name = result.ticket["ticket_name"]
        await channel.edit(name=new_name, reason=f"Ticket renamed by {actor}")
        await self.send_log(channel.guild, build_event_log_embed(
            "Ticket Renamed",
            f"<@{actor.id}> renamed ticket {result.ticket['id']} to `{new_name}`",
        ))
        return result

    def transcript_file(self, channel_id: int) -> Optional[discord.File]:
        """Transcript attachment, or None if the channel is not a ticket."""
        ticket = self.db.get_ticket(channel_id)
        if ticket is None:
            return None
        return create_transcript_file(ticket, self.workflow.transcript(channel_id))

    async def delete(self, channel: discord.TextChannel, actor: discord.abc.User) -> TransitionResult:
        """Archive the transcript to the logs channel, then delete channel and record."""
        ticket = self.db.get_ticket(channel.id)
        if ticket is None:
            return TransitionResult(False, NOT_A_TICKET)

        settings = self.get_settings(channel.guild.id)
        await send_to_channel(
            self.find_logs_channel(channel.guild, settings),
            embed=build_event_log_embed(
                "Ticket Deleted", f"<@{actor.id}> deleted ticket {ticket['id']}",
            ),
            file=self.transcript_file(channel.id),
        )

        self.db.delete_ticket(channel.id)
        await channel.delete(reason=f"Ticket {ticket['id']} deleted by {actor}")

        logger.tree("Ticket Channel Deleted", [
            ("Ticket ID", ticket["id"]),
            ("By", f"{actor} ({actor.id})"),
        ], emoji="🗑️")

        return TransitionResult(True, f"Ticket {ticket['id']} deleted.", ticket)


# =============================================================================
# Reply Helpers
# =============================================================================

_FAILURE_TITLES = (
    (NOT_A_TICKET, "Not a Ticket"),
    (ALREADY_CLOSED, "Ticket Closed"),
    (ALREADY_CLAIMED_SELF, "Already Claimed"),
    ("This ticket is already claimed by", "Already Claimed"),
    (ALREADY_ADDED, "Already Added"),
    (NOT_IN_TICKET, "Not in Ticket"),
    (CANNOT_REMOVE_CREATOR, "Cannot Remove"),
    (INVALID_NAME, "Invalid Name"),
    (NOT_SET_UP, "Ticket System Not Set Up"),
    (CATEGORY_NOT_FOUND, "Ticket Category Not Found"),
)


def failure_title(message: str) -> str:
    """Embed title for a refused transition."""
    for prefix, title in _FAILURE_TITLES:
        if message.startswith(prefix):
            return title
    return "Ticket Error"


def is_ticket_staff(member, settings: Optional[TicketSettingsRecord]) -> bool:
    """Staff roles from settings, bot moderators, or Manage Channels."""
    if has_mod_role(member, (settings or {}).get("staff_roles")):
        return True
    permissions = getattr(member, "guild_permissions", None)
    return bool(permissions is not None and permissions.manage_channels)


__all__ = [
    "TicketService",
    "ticket_channel_name",
    "failure_title",
    "is_ticket_staff",
    "NOT_SET_UP",
    "CATEGORY_NOT_FOUND",
]
