"""
HarborBot - Record Store Tests
==============================

Every test taking any_db runs against both SQLite and the memory store.
"""

import sqlite3

import pytest

from src.core.database import (
    DatabaseError,
    DatabaseManager,
    DuplicateRecordError,
    MemoryDatabase,
    get_db,
    init_db,
)


GUILD = 1000
CHANNEL = 2000
USER = 3000
STAFF = 4000


class TestBackendSelection:
    """Tests for init_db()."""

    def test_no_path_selects_memory(self):
        db = init_db(None)
        assert isinstance(db, MemoryDatabase)
        assert db.backend_name == "memory"
        assert get_db() is db

    def test_path_selects_sqlite(self, temp_db_path):
        db = init_db(temp_db_path)
        assert isinstance(db, DatabaseManager)
        assert db.backend_name == "sqlite"
        assert temp_db_path.exists()

    def test_unopenable_path_falls_back_to_memory(self, tmp_path):
        # A directory cannot be opened as a database file
        db = init_db(tmp_path)
        assert isinstance(db, MemoryDatabase)
        assert DatabaseManager._instance is None

    def test_schema_failure_falls_back_to_memory(self, temp_db_path):
        # An older tickets table without the columns the indexes need
        conn = sqlite3.connect(str(temp_db_path))
        conn.execute("CREATE TABLE tickets (id INTEGER)")
        conn.commit()
        conn.close()

        db = init_db(temp_db_path)
        assert isinstance(db, MemoryDatabase)
        assert DatabaseManager._instance is None
        assert get_db() is db

    def test_init_schema_failure_raises_database_error(self, test_db):
        test_db.execute("DROP TABLE warnings")
        test_db.execute("CREATE TABLE warnings (id INTEGER)")
        with pytest.raises(DatabaseError):
            test_db.init_schema()


class TestTickets:
    """Tests for ticket records."""

    def test_create_ticket_defaults(self, any_db):
        ticket = any_db.create_ticket(GUILD, CHANNEL, USER, "General Support")

        assert ticket["id"] == "ticket-1"
        assert ticket["status"] == "open"
        assert ticket["claimed_by"] is None
        assert ticket["participants"] == [USER]
        assert ticket["messages"] == []

    def test_ticket_ids_increase(self, any_db):
        any_db.create_ticket(GUILD, CHANNEL, USER, "General Support")
        second = any_db.create_ticket(GUILD, CHANNEL + 1, USER, "General Support")
        assert second["id"] == "ticket-2"
        assert any_db.get_ticket_by_id("ticket-2")["channel_id"] == CHANNEL + 1

    def test_duplicate_channel_rejected(self, any_db):
        any_db.create_ticket(GUILD, CHANNEL, USER, "General Support")
        with pytest.raises(DuplicateRecordError):
            any_db.create_ticket(GUILD, CHANNEL, USER + 1, "Report Issue")

    def test_get_missing_ticket(self, any_db):
        assert any_db.get_ticket(CHANNEL) is None
        assert any_db.get_ticket_by_id("not-a-ticket") is None

    def test_list_tickets_by_status(self, any_db):
        any_db.create_ticket(GUILD, CHANNEL, USER, "General Support")
        any_db.create_ticket(GUILD, CHANNEL + 1, USER, "General Support")
        any_db.create_ticket(GUILD + 1, CHANNEL + 2, USER, "General Support")
        any_db.close_ticket(CHANNEL, STAFF)

        assert [t["channel_id"] for t in any_db.list_tickets(GUILD)] == [CHANNEL, CHANNEL + 1]
        assert [t["channel_id"] for t in any_db.list_tickets(GUILD, "open")] == [CHANNEL + 1]

    def test_update_ticket(self, any_db):
        any_db.create_ticket(GUILD, CHANNEL, USER, "General Support")
        updated = any_db.update_ticket(CHANNEL, {"type": "Report Issue", "guild_id": 1})

        assert updated["type"] == "Report Issue"
        assert updated["guild_id"] == GUILD
        assert any_db.update_ticket(CHANNEL + 9, {"type": "x"}) is None

    def test_delete_ticket(self, any_db):
        any_db.create_ticket(GUILD, CHANNEL, USER, "General Support")
        assert any_db.delete_ticket(CHANNEL) is True
        assert any_db.delete_ticket(CHANNEL) is False

    def test_returned_records_are_copies(self, any_db):
        ticket = any_db.create_ticket(GUILD, CHANNEL, USER, "General Support")
        ticket["participants"].append(999)
        assert any_db.get_ticket(CHANNEL)["participants"] == [USER]


class TestGuardedTransitions:
    """Tests for conditional ticket writes."""

    def test_claim_once(self, any_db):
        any_db.create_ticket(GUILD, CHANNEL, USER, "General Support")
        assert any_db.claim_ticket(CHANNEL, STAFF) is True
        assert any_db.claim_ticket(CHANNEL, STAFF + 1) is False
        assert any_db.get_ticket(CHANNEL)["claimed_by"] == STAFF

    def test_close_once(self, any_db):
        any_db.create_ticket(GUILD, CHANNEL, USER, "General Support")
        assert any_db.close_ticket(CHANNEL, STAFF) is True
        assert any_db.close_ticket(CHANNEL, STAFF) is False

        ticket = any_db.get_ticket(CHANNEL)
        assert ticket["status"] == "closed"
        assert ticket["closed_by"] == STAFF
        assert ticket["closed_at"] is not None

    def test_claim_closed_ticket_refused(self, any_db):
        any_db.create_ticket(GUILD, CHANNEL, USER, "General Support")
        any_db.close_ticket(CHANNEL, STAFF)
        assert any_db.claim_ticket(CHANNEL, STAFF) is False

    def test_participants(self, any_db):
        any_db.create_ticket(GUILD, CHANNEL, USER, "General Support")

        assert any_db.add_ticket_participant(CHANNEL, 77) is True
        assert any_db.add_ticket_participant(CHANNEL, 77) is False
        assert any_db.remove_ticket_participant(CHANNEL, USER) is False
        assert any_db.remove_ticket_participant(CHANNEL, 77) is True
        assert any_db.remove_ticket_participant(CHANNEL, 77) is False

    def test_rename_allowed_when_closed(self, any_db):
        any_db.create_ticket(GUILD, CHANNEL, USER, "General Support")
        any_db.close_ticket(CHANNEL, STAFF)
        assert any_db.rename_ticket(CHANNEL, "ticket-billing") is True
        assert any_db.get_ticket(CHANNEL)["ticket_name"] == "ticket-billing"

    def test_transcript_append(self, any_db):
        assert any_db.append_ticket_message(CHANNEL, {"id": 1, "content": "hi"}) is False

        any_db.create_ticket(GUILD, CHANNEL, USER, "General Support")
        any_db.append_ticket_message(CHANNEL, {"id": 1, "content": "first"})
        any_db.append_ticket_message(CHANNEL, {"id": 2, "content": "second"})

        assert [m["content"] for m in any_db.get_ticket_transcript(CHANNEL)] == ["first", "second"]


class TestTicketSettings:
    """Tests for per-guild ticket settings."""

    def test_upsert_creates_defaults(self, any_db):
        settings = any_db.upsert_ticket_settings(GUILD)

        assert settings["category"] == "Tickets"
        assert settings["logs_channel"] == "ticket-logs"
        assert len(settings["ticket_types"]) == 3
        assert settings["staff_roles"] == []

    def test_upsert_merges(self, any_db):
        any_db.upsert_ticket_settings(GUILD, {"staff_roles": ["1", "2"]})
        settings = any_db.upsert_ticket_settings(GUILD, {"category": "Help"})

        assert settings["category"] == "Help"
        assert settings["staff_roles"] == ["1", "2"]

    def test_update_missing_settings(self, any_db):
        assert any_db.get_ticket_settings(GUILD) is None
        assert any_db.update_ticket_settings(GUILD, {"category": "x"}) is None

    def test_panel_message(self, any_db):
        settings = any_db.set_panel_message(GUILD, 11, 22)
        assert settings["panel_channel_id"] == 11
        assert settings["panel_message_id"] == 22

    def test_logs_newest_first(self, any_db):
        for action in ("create", "claim", "close"):
            any_db.add_ticket_log(GUILD, action, USER, {"n": action}, ticket_id="ticket-1")
        any_db.add_ticket_log(GUILD + 1, "create", USER)

        logs = any_db.get_ticket_logs(GUILD, limit=2)
        assert [entry["action"] for entry in logs] == ["close", "claim"]
        assert logs[0]["details"] == {"n": "close"}


class TestTemplates:
    """Tests for embed templates and sent embeds."""

    def test_template_unique_per_guild(self, any_db):
        any_db.create_template(GUILD, "rules", {"title": "Rules"}, USER)
        any_db.create_template(GUILD + 1, "rules", {"title": "Other"}, USER)

        with pytest.raises(DuplicateRecordError):
            any_db.create_template(GUILD, "rules", {"title": "Again"}, USER)

        assert any_db.get_template(GUILD, "rules")["embed_data"] == {"title": "Rules"}

    def test_list_templates_sorted(self, any_db):
        any_db.create_template(GUILD, "welcome", {}, USER)
        any_db.create_template(GUILD, "faq", {}, USER)
        assert [t["name"] for t in any_db.list_templates(GUILD)] == ["faq", "welcome"]

    def test_update_and_delete_template(self, any_db):
        any_db.create_template(GUILD, "rules", {"title": "Rules"}, USER)

        updated = any_db.update_template(GUILD, "rules", {"title": "New"})
        assert updated["embed_data"] == {"title": "New"}
        assert any_db.delete_template(GUILD, "rules") is True
        assert any_db.delete_template(GUILD, "rules") is False
        assert any_db.update_template(GUILD, "rules", {}) is None

    def test_sent_embed_lifecycle(self, any_db):
        any_db.store_sent_embed(55, CHANNEL, GUILD, {"title": "Hello"}, USER)

        record = any_db.update_sent_embed(55, {"title": "Edited"}, STAFF)
        assert record["embed_data"] == {"title": "Edited"}
        assert record["updated_by"] == STAFF
        assert [r["message_id"] for r in any_db.list_sent_embeds(GUILD)] == [55]

        assert any_db.delete_sent_embed(55) is True
        assert any_db.get_sent_embed(55) is None


class TestWarnings:
    """Tests for numbered warnings."""

    def test_numbers_follow_issue_order(self, any_db):
        first = any_db.add_warning(GUILD, USER, STAFF, "Spam")
        second = any_db.add_warning(GUILD, USER, STAFF, "Caps")
        other = any_db.add_warning(GUILD, USER + 1, STAFF, "Links")

        assert (first["number"], second["number"], other["number"]) == (1, 2, 1)
        assert any_db.get_user_warn_count(GUILD, USER) == 2

    def test_remove_renumbers(self, any_db):
        for reason in ("a", "b", "c"):
            any_db.add_warning(GUILD, USER, STAFF, reason)

        removed = any_db.remove_warning(GUILD, USER, 2)
        assert removed["reason"] == "b"

        remaining = any_db.get_user_warnings(GUILD, USER)
        assert [(w["number"], w["reason"]) for w in remaining] == [(1, "a"), (2, "c")]

    def test_remove_out_of_range(self, any_db):
        any_db.add_warning(GUILD, USER, STAFF, "a")
        assert any_db.remove_warning(GUILD, USER, 0) is None
        assert any_db.remove_warning(GUILD, USER, 2) is None
        assert any_db.get_user_warn_count(GUILD, USER) == 1

    def test_clear_warnings(self, any_db):
        any_db.add_warning(GUILD, USER, STAFF, "a")
        any_db.add_warning(GUILD, USER, STAFF, "b")
        any_db.add_warning(GUILD + 1, USER, STAFF, "c")

        assert any_db.clear_warnings(GUILD, USER) == 2
        assert any_db.clear_warnings(GUILD, USER) == 0
        assert any_db.get_user_warn_count(GUILD + 1, USER) == 1


class TestStatus:
    """Tests for ping() and init_schema()."""

    def test_ping_reports_counts(self, any_db):
        any_db.create_ticket(GUILD, CHANNEL, USER, "General Support")
        any_db.add_warning(GUILD, USER, STAFF, "a")

        status = any_db.ping()
        assert status["ok"] is True
        assert status["backend"] == any_db.backend_name
        assert status["server_time"].endswith("UTC")
        assert status["counts"]["tickets"] == 1
        assert status["counts"]["warnings"] == 1

    def test_init_schema_keeps_data(self, any_db):
        any_db.create_template(GUILD, "rules", {}, USER)
        any_db.init_schema()
        assert any_db.get_template(GUILD, "rules") is not None


class TestSqliteErrors:
    """Tests for how SQLite constraint failures are reported."""

    def test_unique_violation_is_duplicate(self, test_db):
        test_db.create_template(GUILD, "rules", {}, USER)
        with pytest.raises(DuplicateRecordError):
            test_db.create_template(GUILD, "rules", {}, USER)

    def test_not_null_violation_is_plain_database_error(self, test_db):
        with pytest.raises(DatabaseError) as exc_info:
            test_db.execute("INSERT INTO warnings (guild_id) VALUES (?)", (GUILD,))
        assert not isinstance(exc_info.value, DuplicateRecordError)
