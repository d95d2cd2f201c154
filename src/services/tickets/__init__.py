"""
HarborBot - Ticket System
=========================

Ticket workflow (state machine + audit log) and its Discord side.
"""

from .workflow import TicketWorkflow, TransitionResult, clean_ticket_name
from .service import TicketService, ticket_channel_name, failure_title, is_ticket_staff
from .buttons import TicketComponentHandlers
from .modals import TicketRenameModal
from .views import TicketControlView, CloseConfirmView, ClosedTicketView, TicketPanelView
from .embeds import build_panel_embed, build_logs_list_embed
from .transcript import format_transcript, create_transcript_file, message_to_record


__all__ = [
    # Workflow
    "TicketWorkflow",
    "TransitionResult",
    "clean_ticket_name",
    # Service
    "TicketService",
    "ticket_channel_name",
    "failure_title",
    "is_ticket_staff",
    # Components
    "TicketComponentHandlers",
    "TicketRenameModal",
    "TicketControlView",
    "CloseConfirmView",
    "ClosedTicketView",
    "TicketPanelView",
    # Embeds
    "build_panel_embed",
    "build_logs_list_embed",
    # Transcript
    "format_transcript",
    "create_transcript_file",
    "message_to_record",
]
