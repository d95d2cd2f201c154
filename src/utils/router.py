"""
HarborBot - Interaction Router
==============================

Explicit registry for button, select menu and modal custom IDs.

DESIGN:
    Custom IDs are underscore-joined tokens: domain, action, then
    arguments ("ticket_claim", "embed_delete_<msg>_<chan>"). A route is
    registered for (domain, action, kind) and may narrow further with a
    sub-action, which is matched before the plain route. Whatever tokens
    follow the matched prefix are passed to the handler as args.

    Unknown IDs are logged at debug level and ignored. Handler failures
    go through ErrorHandler and the user gets one generic ephemeral reply.
"""

from typing import Awaitable, Callable, Dict, List, Optional, Tuple

import discord

from src.core.logger import logger
from src.utils.error_handler import ErrorHandler
from src.utils.interaction import send_generic_error


Handler = Callable[[discord.Interaction, List[str]], Awaitable[None]]
RouteKey = Tuple[str, ...]

KINDS = ("button", "select", "modal")

_SELECT_COMPONENT_TYPES = {
    discord.ComponentType.string_select.value,
    discord.ComponentType.user_select.value,
    discord.ComponentType.role_select.value,
    discord.ComponentType.mentionable_select.value,
    discord.ComponentType.channel_select.value,
}


def parse_custom_id(custom_id: str) -> Tuple[str, str, List[str]]:
    """
    Split a custom ID into (domain, action, args).

    Empty trailing tokens are dropped, so "ticket_claim_" parses the same
    as "ticket_claim". Missing parts come back as "".
    """
    tokens = (custom_id or "").split("_")
    while tokens and tokens[-1] == "":
        tokens.pop()

    domain = tokens[0] if tokens else ""
    action = tokens[1] if len(tokens) > 1 else ""
    return domain, action, tokens[2:]


def interaction_kind(interaction: discord.Interaction) -> Optional[str]:
    """Map an interaction to "button", "select", "modal" or None."""
    if interaction.type == discord.InteractionType.modal_submit:
        return "modal"
    if interaction.type != discord.InteractionType.component:
        return None

    component_type = (interaction.data or {}).get("component_type")
    if component_type == discord.ComponentType.button.value:
        return "button"
    if component_type in _SELECT_COMPONENT_TYPES:
        return "select"
    return None


class InteractionRouter:
    """
    Maps custom IDs to coroutine handlers.

    Usage:
        router = InteractionRouter()
        router.register("ticket", "claim", "button", handle_claim)

        @router.route("embed", "template", "button", sub="use")
        async def use_template(interaction, args): ...
    """

    def __init__(self) -> None:
        self._routes: Dict[RouteKey, Handler] = {}

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, key: RouteKey) -> bool:
        return key in self._routes

    # =========================================================================
    # Registration
    # =========================================================================

    def register(
        self,
        domain: str,
        action: str,
        kind: str,
        handler: Handler,
        sub: Optional[str] = None,
    ) -> None:
        """
        Register a handler.

        Raises:
            ValueError: On an unknown kind or a duplicate route.
        """
        if kind not in KINDS:
            raise ValueError(f"Unknown interaction kind: {kind}")

        key: RouteKey = (kind, domain, action) if sub is None else (kind, domain, action, sub)
        if key in self._routes:
            raise ValueError(f"Route already registered: {'_'.join(key[1:])} ({kind})")
        self._routes[key] = handler

    def route(
        self,
        domain: str,
        action: str,
        kind: str,
        sub: Optional[str] = None,
    ) -> Callable[[Handler], Handler]:
        """Decorator form of register()."""
        def decorator(handler: Handler) -> Handler:
            self.register(domain, action, kind, handler, sub=sub)
            return handler
        return decorator

    # =========================================================================
    # Resolution
    # =========================================================================

    def resolve(self, custom_id: str, kind: str) -> Optional[Tuple[Handler, List[str]]]:
        """
        Find the handler for a custom ID.

        Returns:
            (handler, args) or None when nothing is registered.
        """
        domain, action, args = parse_custom_id(custom_id)
        if not domain:
            return None

        if args:
            handler = self._routes.get((kind, domain, action, args[0]))
            if handler is not None:
                return handler, args[1:]

        handler = self._routes.get((kind, domain, action))
        if handler is not None:
            return handler, args
        return None

    async def dispatch(self, interaction: discord.Interaction, kind: Optional[str] = None) -> bool:
        """
        Route an interaction to its handler.

        Returns:
            True if a handler ran (even if it failed), False if ignored.
        """
        kind = kind or interaction_kind(interaction)
        custom_id = (interaction.data or {}).get("custom_id", "")
        if kind is None or not custom_id:
            return False

        resolved = self.resolve(custom_id, kind)
        if resolved is None:
            logger.debug("Unrouted Interaction", [
                ("Custom ID", custom_id),
                ("Kind", kind),
            ])
            return False

        handler, args = resolved
        try:
            await handler(interaction, args)
        except Exception as e:
            ErrorHandler.handle(
                e,
                location=f"Interaction: {custom_id}",
                interaction=interaction,
            )
            await send_generic_error(interaction)
        return True


__all__ = ["InteractionRouter", "Handler", "KINDS", "parse_custom_id", "interaction_kind"]
