"""
HarborBot - Keep-alive Server
=============================

HTTP endpoints for hosting platforms and uptime monitors.

DESIGN:
    Runs inside the bot's event loop through aiohttp's AppRunner, so the
    process exposes a port without a second server process.

    Routes:
    - GET /        small HTML landing page
    - GET /health  plain "OK" with status 200
    - GET /status  JSON with uptime, memory and runtime details
"""

import platform
import sys
import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

import psutil
from aiohttp import web

from src.core.logger import logger

if TYPE_CHECKING:
    from src.bot import HarborBot


# =============================================================================
# Landing Page
# =============================================================================

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>HarborBot</title>
  <style>
    body { font-family: sans-serif; background: #2b2d31; color: #f2f3f5; text-align: center; padding-top: 10vh; }
    .badge { display: inline-block; padding: 4px 12px; border-radius: 12px; background: #57F287; color: #111; }
  </style>
</head>
<body>
  <h1>HarborBot</h1>
  <p><span class="badge">online</span></p>
  <p>Moderation, tickets and embeds for your Discord server.</p>
  <p><a href="/status" style="color:#5865F2">status</a></p>
</body>
</html>
"""


# =============================================================================
# Middleware
# =============================================================================

@web.middleware
async def security_headers(request: web.Request, handler) -> web.StreamResponse:
    """Attach basic hardening headers to every response."""
    response = await handler(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-XSS-Protection"] = "1; mode=block"
    return response


# =============================================================================
# Keep-alive Server
# =============================================================================

class HealthCheckServer:
    """
    Keep-alive HTTP server.

    Attributes:
        bot: Bot instance, or None when run standalone.
        port: Port number for the HTTP server.
        app: aiohttp Application instance.
        runner: AppRunner, set once started.
    """

    def __init__(self, bot: Optional["HarborBot"] = None, port: int = 5000) -> None:
        self.bot = bot
        self.port = port
        self.started_at = time.monotonic()
        self.app = web.Application(middlewares=[security_headers])
        self.runner: Optional[web.AppRunner] = None

        self.app.router.add_get("/", self.index_handler)
        self.app.router.add_get("/health", self.health_handler)
        self.app.router.add_get("/status", self.status_handler)

    # =========================================================================
    # Request Handlers
    # =========================================================================

    async def index_handler(self, request: web.Request) -> web.Response:
        return web.Response(text=INDEX_HTML, content_type="text/html")

    async def health_handler(self, request: web.Request) -> web.Response:
        return web.Response(text="OK", status=200)

    async def status_handler(self, request: web.Request) -> web.Response:
        """
        Report process status.

        Always answers "online" while the process serves requests; Discord
        connection details are included when a bot is attached.
        """
        try:
            rss = psutil.Process().memory_info().rss
            status = {
                "status": "online",
                "message": "Discord bot is running",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "uptime": round(time.monotonic() - self.started_at, 2),
                "memory": {"rss_mb": round(rss / (1024 * 1024), 2)},
                "python_version": sys.version.split()[0],
                "platform": platform.system().lower(),
            }

            if self.bot is not None:
                status["connected"] = self.bot.is_ready()
                status["guilds"] = len(self.bot.guilds)
                context = getattr(self.bot, "ctx", None)
                if context is not None:
                    status["backend"] = context.db.backend_name

            return web.json_response(status)

        except (psutil.Error, AttributeError, OSError) as e:
            logger.error("Status Endpoint Error", [
                ("Error", str(e)[:100]),
            ])
            return web.json_response(
                {"status": "error", "error": str(e)},
                status=500,
            )

    # =========================================================================
    # Lifecycle Management
    # =========================================================================

    async def start(self) -> None:
        """Bind to 0.0.0.0:port. Failures are logged, not raised."""
        try:
            self.runner = web.AppRunner(self.app)
            await self.runner.setup()
            site = web.TCPSite(self.runner, "0.0.0.0", self.port)
            await site.start()

            logger.tree("Keep-alive Server Started", [
                ("Port", str(self.port)),
                ("Endpoints", "/, /health, /status"),
            ], emoji="🏥")

        except OSError as e:
            logger.error("Keep-alive Server Startup Failed", [
                ("Port", str(self.port)),
                ("Error", str(e)[:100]),
            ])

    async def stop(self) -> None:
        """Safe to call even if the server never started."""
        if self.runner:
            await self.runner.cleanup()
            self.runner = None
            logger.info("Keep-alive server stopped")


# =============================================================================
# Module Export
# =============================================================================

__all__ = ["HealthCheckServer", "INDEX_HTML"]
