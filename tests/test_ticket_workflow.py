"""
HarborBot - Ticket Workflow Tests
=================================

State machine guards and audit logging, on both backends.
"""

from src.services.tickets.workflow import (
    ALREADY_ADDED,
    ALREADY_CLAIMED_SELF,
    ALREADY_CLOSED,
    CANNOT_REMOVE_CREATOR,
    INVALID_NAME,
    NOT_A_TICKET,
    NOT_IN_TICKET,
    clean_ticket_name,
)


GUILD = 1000
CHANNEL = 2000
USER = 3000
STAFF = 4000


def open_ticket(workflow):
    return workflow.open_ticket(GUILD, CHANNEL, USER, "General Support", reason="Login broken")


def log_actions(db):
    return [entry["action"] for entry in reversed(db.get_ticket_logs(GUILD, limit=50))]


class TestOpen:
    """Tests for ticket creation."""

    def test_open_logs_create(self, workflow, any_db):
        result = open_ticket(workflow)

        assert result.ok is True
        assert result.ticket["status"] == "open"
        logs = any_db.get_ticket_logs(GUILD)
        assert logs[0]["action"] == "create"
        assert logs[0]["ticket_id"] == result.ticket["id"]
        assert logs[0]["details"]["reason"] == "Login broken"


class TestClaim:
    """Tests for claim()."""

    def test_claim(self, workflow, any_db):
        open_ticket(workflow)
        result = workflow.claim(CHANNEL, STAFF)

        assert result.ok is True
        assert result.ticket["claimed_by"] == STAFF
        assert log_actions(any_db) == ["create", "claim"]

    def test_claim_twice_by_same_staff(self, workflow, any_db):
        open_ticket(workflow)
        workflow.claim(CHANNEL, STAFF)
        result = workflow.claim(CHANNEL, STAFF)

        assert result.ok is False
        assert result.message == ALREADY_CLAIMED_SELF
        assert log_actions(any_db) == ["create", "claim"]

    def test_claim_by_other_staff(self, workflow):
        open_ticket(workflow)
        workflow.claim(CHANNEL, STAFF)
        result = workflow.claim(CHANNEL, STAFF + 1)

        assert result.ok is False
        assert f"<@{STAFF}>" in result.message

    def test_claim_closed(self, workflow):
        open_ticket(workflow)
        workflow.close(CHANNEL, STAFF)
        result = workflow.claim(CHANNEL, STAFF)

        assert result.ok is False
        assert result.message == ALREADY_CLOSED

    def test_claim_outside_ticket(self, workflow):
        result = workflow.claim(CHANNEL, STAFF)
        assert result.ok is False
        assert result.message == NOT_A_TICKET
        assert result.ticket is None


class TestClose:
    """Tests for close()."""

    def test_close_records_reason(self, workflow, any_db):
        open_ticket(workflow)
        result = workflow.close(CHANNEL, STAFF, reason="Resolved")

        assert result.ok is True
        assert result.ticket["status"] == "closed"
        assert any_db.get_ticket_logs(GUILD)[0]["details"] == {"reason": "Resolved"}

    def test_close_default_reason(self, workflow, any_db):
        open_ticket(workflow)
        workflow.close(CHANNEL, STAFF)
        assert any_db.get_ticket_logs(GUILD)[0]["details"]["reason"] == "No reason provided"

    def test_close_twice_logs_once(self, workflow, any_db):
        open_ticket(workflow)
        workflow.close(CHANNEL, STAFF)
        result = workflow.close(CHANNEL, STAFF)

        assert result.ok is False
        assert result.message == ALREADY_CLOSED
        assert log_actions(any_db) == ["create", "close"]


class TestParticipants:
    """Tests for add_participant() and remove_participant()."""

    def test_add_and_remove(self, workflow, any_db):
        open_ticket(workflow)

        added = workflow.add_participant(CHANNEL, 77, STAFF)
        assert added.ok is True
        assert 77 in added.ticket["participants"]

        removed = workflow.remove_participant(CHANNEL, 77, STAFF)
        assert removed.ok is True
        assert 77 not in removed.ticket["participants"]

        assert log_actions(any_db) == ["create", "add_user", "remove_user"]

    def test_add_twice(self, workflow):
        open_ticket(workflow)
        workflow.add_participant(CHANNEL, 77, STAFF)
        result = workflow.add_participant(CHANNEL, 77, STAFF)
        assert result.message == ALREADY_ADDED

    def test_cannot_remove_creator(self, workflow, any_db):
        open_ticket(workflow)
        result = workflow.remove_participant(CHANNEL, USER, STAFF)

        assert result.ok is False
        assert result.message == CANNOT_REMOVE_CREATOR
        assert log_actions(any_db) == ["create"]

    def test_remove_stranger(self, workflow):
        open_ticket(workflow)
        assert workflow.remove_participant(CHANNEL, 77, STAFF).message == NOT_IN_TICKET

    def test_add_to_closed_ticket(self, workflow):
        open_ticket(workflow)
        workflow.close(CHANNEL, STAFF)
        assert workflow.add_participant(CHANNEL, 77, STAFF).message == ALREADY_CLOSED

    def test_remove_from_closed_ticket(self, workflow, any_db):
        open_ticket(workflow)
        workflow.add_participant(CHANNEL, 77, STAFF)
        workflow.close(CHANNEL, STAFF)

        for user_id in (77, 88):
            result = workflow.remove_participant(CHANNEL, user_id, STAFF)
            assert result.ok is False
            assert result.message == ALREADY_CLOSED

        assert 77 in any_db.get_ticket(CHANNEL)["participants"]
        assert log_actions(any_db) == ["create", "add_user", "close"]

    def test_creator_check_precedes_closed_check(self, workflow):
        open_ticket(workflow)
        workflow.close(CHANNEL, STAFF)
        assert workflow.remove_participant(CHANNEL, USER, STAFF).message == CANNOT_REMOVE_CREATOR


class TestRename:
    """Tests for rename()."""

    def test_rename_cleans_name(self, workflow, any_db):
        open_ticket(workflow)
        result = workflow.rename(CHANNEL, "Billing Issue!!", STAFF)

        assert result.ok is True
        assert result.ticket["ticket_name"] == "ticket-billingissue"
        details = any_db.get_ticket_logs(GUILD)[0]["details"]
        assert details["new_name"] == "ticket-billingissue"
        assert details["old_name"] is None

    def test_rename_closed_ticket(self, workflow):
        open_ticket(workflow)
        workflow.close(CHANNEL, STAFF)
        assert workflow.rename(CHANNEL, "done", STAFF).ok is True

    def test_rename_to_nothing(self, workflow, any_db):
        open_ticket(workflow)
        result = workflow.rename(CHANNEL, "!!!", STAFF)

        assert result.ok is False
        assert result.message == INVALID_NAME
        assert log_actions(any_db) == ["create"]

    def test_clean_ticket_name(self):
        assert clean_ticket_name("Hello World") == "helloworld"
        assert clean_ticket_name("bug-123_x") == "bug-123_x"
        assert clean_ticket_name("") == ""


class TestTranscript:
    """Tests for message capture."""

    def test_record_message(self, workflow):
        open_ticket(workflow)
        assert workflow.record_message(CHANNEL, {"id": 1, "content": "hello"}) is True
        assert workflow.transcript(CHANNEL)[0]["content"] == "hello"

    def test_record_outside_ticket(self, workflow):
        assert workflow.record_message(CHANNEL, {"id": 1, "content": "hello"}) is False
        assert workflow.transcript(CHANNEL) == []
