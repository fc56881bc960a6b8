"""
Tests for the Campaign Escrow models

Test strategy:
1. Unit tests for models and lifecycle derivation
2. Ledger tests with in-memory adapters (see test_registry / test_contributions)
3. No real asset movements in tests
"""

import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from campaign_escrow.errors import ErrorKind, EscrowError, GoalMetError, NotFoundError
from campaign_escrow.models.campaign import (
    Campaign,
    CampaignDetails,
    CampaignState,
    Contribution,
)
from campaign_escrow.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)
DEADLINE = NOW + timedelta(days=1)


def make_campaign(**overrides) -> Campaign:
    fields = dict(
        campaign_id=1,
        creator="alice",
        goal=100,
        deadline=DEADLINE,
        created_at=NOW,
    )
    fields.update(overrides)
    return Campaign(**fields)


class TestCampaignModel:
    """Tests for the Campaign record."""

    def test_campaign_defaults(self):
        campaign = make_campaign()
        assert campaign.funds_raised == 0
        assert campaign.is_completed is False

    def test_campaign_rejects_non_positive_goal(self):
        with pytest.raises(ValidationError):
            make_campaign(goal=0)

    def test_campaign_rejects_zero_id(self):
        with pytest.raises(ValidationError):
            make_campaign(campaign_id=0)

    def test_campaign_requires_timezone_aware_deadline(self):
        with pytest.raises(ValidationError, match="timezone-aware"):
            make_campaign(deadline=datetime(2024, 6, 2))

    def test_negative_funds_rejected_on_assignment(self):
        campaign = make_campaign()
        with pytest.raises(ValidationError):
            campaign.funds_raised = -1


class TestCampaignState:
    """Lifecycle derivation at a given time."""

    def test_open_before_deadline(self):
        assert make_campaign().state_at(NOW) == CampaignState.OPEN

    def test_expired_exactly_at_deadline(self):
        assert make_campaign().state_at(DEADLINE) == CampaignState.EXPIRED_FAILURE

    def test_expired_success_when_goal_reached(self):
        campaign = make_campaign(funds_raised=100)
        assert campaign.state_at(DEADLINE) == CampaignState.EXPIRED_SUCCESS

    def test_open_even_when_goal_reached(self):
        campaign = make_campaign(funds_raised=500)
        assert campaign.state_at(NOW) == CampaignState.OPEN

    def test_claimed_is_terminal(self):
        campaign = make_campaign(funds_raised=100, is_completed=True)
        assert campaign.state_at(DEADLINE + timedelta(days=30)) == CampaignState.CLAIMED


class TestSnapshots:
    """Tests for the read-only views handed to callers."""

    def test_snapshot_copies_fields(self):
        campaign = make_campaign(funds_raised=40)
        details = campaign.snapshot(NOW)
        assert isinstance(details, CampaignDetails)
        assert details.as_tuple() == ("alice", 100, DEADLINE, 40, False)
        assert details.state == CampaignState.OPEN

    def test_snapshot_is_frozen(self):
        details = make_campaign().snapshot(NOW)
        with pytest.raises(ValidationError):
            details.funds_raised = 1_000

    def test_snapshot_does_not_track_later_changes(self):
        campaign = make_campaign()
        details = campaign.snapshot(NOW)
        campaign.funds_raised = 70
        assert details.funds_raised == 0

    def test_contribution_defaults_to_zero(self):
        contribution = Contribution(campaign_id=1, contributor="bob")
        assert contribution.amount == 0


class TestErrors:
    """Every error carries a stable kind."""

    def test_error_kind_and_campaign(self):
        err = GoalMetError("goal reached", 7)
        assert isinstance(err, EscrowError)
        assert err.kind == ErrorKind.GOAL_MET
        assert err.campaign_id == 7
        assert str(err) == "goal reached"

    def test_error_kinds_are_distinct(self):
        kinds = {cls.kind for cls in EscrowError.__subclasses__()}
        assert len(kinds) == len(EscrowError.__subclasses__()) == len(ErrorKind)

    def test_not_found_without_campaign(self):
        assert NotFoundError("missing").campaign_id is None


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        event = AuditEvent(
            event_type=AuditEventType.CAMPAIGN_CREATED,
            description="Campaign created",
        )
        assert event.event_type == AuditEventType.CAMPAIGN_CREATED
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        event = AuditEventBuilder.contribution_made(
            campaign_id=3, contributor="bob", amount=40, timestamp=NOW,
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "contribution_made"
        assert log_dict["campaign_id"] == 3
        assert log_dict["actor"] == "bob"
        assert log_dict["amount"] == 40

    def test_json_line_round_trips(self):
        event = AuditEventBuilder.campaign_created(
            campaign_id=1, creator="alice", goal=100, deadline=DEADLINE, timestamp=NOW,
        )
        line = event.to_json_line()
        assert "\n" not in line
        assert json.loads(line)["details"]["deadline"] == DEADLINE.isoformat()
        assert AuditEvent.model_validate_json(line).to_log_dict() == event.to_log_dict()

    def test_builder_operation_rejected(self):
        event = AuditEventBuilder.operation_rejected(
            operation="refund",
            error_code="no_contribution",
            error_message="nothing to refund",
            actor="bob",
            campaign_id=2,
        )
        assert event.severity == AuditSeverity.WARNING
        assert event.error_code == "no_contribution"
        assert event.details["operation"] == "refund"

    def test_builder_transfer_failed(self):
        event = AuditEventBuilder.transfer_failed(
            operation="claim_funds",
            direction="push",
            counterparty="alice",
            amount=110,
            campaign_id=1,
            error_message="declined",
            timestamp=NOW,
        )
        assert event.severity == AuditSeverity.ERROR
        assert event.amount == 110
        assert event.details == {"operation": "claim_funds", "direction": "push"}


class TestEnums:
    def test_state_values(self):
        assert CampaignState.OPEN.value == "open"
        assert CampaignState("claimed") is CampaignState.CLAIMED

    def test_public_event_types_exist(self):
        for name in ("campaign_created", "contribution_made", "funds_claimed", "refund_issued"):
            assert AuditEventType(name) is not None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
