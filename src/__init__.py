"""
HarborBot - Source Package
==========================

Package Structure:
- bot.py: HarborBot client, cog loading and lifecycle
- commands/: Slash command cogs
- core/: Config, logging, record stores, keep-alive server
- events/: Interaction routing and transcript capture listeners
- services/: Ticket workflow and embed builder systems
- utils/: Helper functions and utilities
"""
