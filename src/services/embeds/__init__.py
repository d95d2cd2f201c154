"""
HarborBot - Embed Builder System
================================

User-authored embeds: validation, authoring sessions, templates and
the registry of embeds the bot has posted.
"""

from .builder import (
    DEFAULT_COLOR,
    PRESETS,
    EmbedValidationError,
    validate_embed_input,
    get_preset,
    parse_color,
    embed_from_payload,
    payload_from_embed,
)
from .sessions import EmbedSessionStore
from .service import EmbedService, EmbedLookupError
from .buttons import EmbedComponentHandlers
from .modals import create_modal, edit_modal, TemplateSaveModal
from .views import PreviewActionsView, TemplateListView, SentEmbedView


__all__ = [
    # Builder
    "DEFAULT_COLOR",
    "PRESETS",
    "EmbedValidationError",
    "validate_embed_input",
    "get_preset",
    "parse_color",
    "embed_from_payload",
    "payload_from_embed",
    # Sessions
    "EmbedSessionStore",
    # Service
    "EmbedService",
    "EmbedLookupError",
    # Components
    "EmbedComponentHandlers",
    "create_modal",
    "edit_modal",
    "TemplateSaveModal",
    "PreviewActionsView",
    "TemplateListView",
    "SentEmbedView",
]
