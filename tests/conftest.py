"""
HarborBot - Test Fixtures
=========================

Shared fixtures for all tests.
"""

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Keep test logs out of the project tree; must be set before src.core.logger is imported
os.environ.setdefault("LOGS_DIR", str(Path(tempfile.gettempdir()) / "harborbot-test-logs"))
os.environ.setdefault("DISCORD_TOKEN", "test-token")


# =============================================================================
# Record Stores
# =============================================================================

@pytest.fixture
def temp_db_path(tmp_path):
    """Create a temporary database path for testing."""
    return tmp_path / "test_harbor.db"


@pytest.fixture
def test_db(temp_db_path):
    """Create a fresh SQLite store."""
    from src.core.database import DatabaseManager

    DatabaseManager.reset_instance()
    db = DatabaseManager(temp_db_path)

    yield db

    DatabaseManager.reset_instance()


@pytest.fixture
def memory_db():
    """Create a fresh in-memory store."""
    from src.core.database import MemoryDatabase
    return MemoryDatabase()


@pytest.fixture(params=["sqlite", "memory"])
def any_db(request):
    """Run a test once against each backend."""
    if request.param == "sqlite":
        return request.getfixturevalue("test_db")
    return request.getfixturevalue("memory_db")


@pytest.fixture
def workflow(any_db):
    from src.services.tickets.workflow import TicketWorkflow
    return TicketWorkflow(any_db)


@pytest.fixture(autouse=True)
def reset_globals():
    """Forget the selected store and cached config between tests."""
    yield
    from src.core.config import reset_config
    from src.core.database import reset_db
    reset_db()
    reset_config()


# =============================================================================
# Mock Discord Objects
# =============================================================================

@pytest.fixture
def mock_discord_user():
    """Create a mock Discord user (not in a guild)."""
    user = MagicMock()
    user.id = 123456789
    user.name = "testuser"
    user.display_name = "Test User"
    user.display_avatar.url = "https://example.com/avatar.png"
    user.created_at = datetime(2020, 9, 13, 12, 0, 0, tzinfo=timezone.utc)
    user.mention = "<@123456789>"
    user.bot = False
    user.send = AsyncMock()
    user.__str__ = MagicMock(return_value="testuser")
    return user


@pytest.fixture
def mock_discord_guild():
    """Create a mock Discord guild."""
    guild = MagicMock()
    guild.id = 987654321
    guild.name = "Test Server"
    guild.me = MagicMock()
    guild.me.id = 999888777
    guild.text_channels = []
    guild.get_member = MagicMock(return_value=None)
    guild.fetch_member = AsyncMock()
    return guild


@pytest.fixture
def mock_discord_interaction(mock_discord_user, mock_discord_guild):
    """Create a mock Discord interaction with a fresh response."""
    interaction = MagicMock()
    interaction.user = mock_discord_user
    interaction.guild = mock_discord_guild
    interaction.guild_id = mock_discord_guild.id
    interaction.channel = MagicMock()
    interaction.channel.id = 555666777
    interaction.channel_id = 555666777
    interaction.data = {}
    interaction.response = MagicMock()
    interaction.response.defer = AsyncMock()
    interaction.response.send_message = AsyncMock()
    interaction.response.edit_message = AsyncMock()
    interaction.response.send_modal = AsyncMock()
    interaction.response.is_done = MagicMock(return_value=False)
    interaction.followup = MagicMock()
    interaction.followup.send = AsyncMock()
    interaction.edit_original_response = AsyncMock()
    return interaction


@pytest.fixture
def mock_discord_message(mock_discord_user):
    """Create a mock Discord message in a ticket channel."""
    message = MagicMock()
    message.id = 111222333
    message.content = "Test message content"
    message.author = mock_discord_user
    message.guild = MagicMock()
    message.channel = MagicMock()
    message.channel.id = 555666777
    message.channel.name = "ticket-testuser-1234"
    message.attachments = []
    message.created_at = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    return message


@pytest.fixture
def mock_bot(memory_db):
    """Create a mock bot carrying a real BotContext on the memory store."""
    from src.core.config import Config
    from src.core.context import BotContext

    bot = MagicMock()
    bot.ctx = BotContext(config=Config(discord_token="test-token"), db=memory_db)
    bot.cogs = {}
    bot.guilds = []
    bot.is_ready = MagicMock(return_value=True)
    return bot
