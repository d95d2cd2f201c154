"""
HarborBot - Services Package
============================

Systems shared by several cogs.

DESIGN:
    Each service package splits its state logic from its Discord side:
    - tickets/: TicketWorkflow (state machine + audit log) and
      TicketService (channels, permissions, transcripts)
    - embeds/: validation, authoring sessions, templates and sent embeds

    Component handlers in each package register their custom IDs on the
    bot's InteractionRouter.
"""
