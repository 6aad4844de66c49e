import pytest

from inventory.exceptions import (
    InvalidTransitionError,
    InventoryLockedError,
    ReturnReasonRequiredError,
)
from inventory.workflow import (
    APPROVE,
    RETURN,
    STATUS_DISPLAY,
    STATUS_PERCENTAGE,
    SUBMIT,
    ApprovalWorkflow,
    AuditStatus,
    parse_status,
)


@pytest.fixture
def workflow():
    return ApprovalWorkflow("Stationary combustion")


def test_starts_in_draft(workflow):
    assert workflow.status == AuditStatus.DRAFT
    assert workflow.available_actions() == [SUBMIT]
    assert not workflow.is_locked
    assert workflow.status_message() == STATUS_DISPLAY[AuditStatus.DRAFT].message


def test_full_approval_path_locks(workflow):
    workflow.submit()
    assert workflow.status == AuditStatus.SUBMITTED
    assert workflow.available_actions() == [APPROVE, RETURN]

    workflow.approve()
    assert workflow.status == AuditStatus.L1_APPROVED
    assert workflow.available_actions() == [APPROVE, RETURN]

    workflow.approve()
    assert workflow.status == AuditStatus.L2_APPROVED
    assert workflow.available_actions() == []
    assert workflow.is_locked
    assert workflow.display.progress == 100

    with pytest.raises(InventoryLockedError):
        workflow.ensure_editable()


def test_locked_workflow_rejects_every_action(workflow):
    workflow.submit()
    workflow.approve()
    workflow.approve()
    for action in (SUBMIT, APPROVE, RETURN):
        with pytest.raises(InvalidTransitionError):
            workflow.perform(action, "late change")


def test_return_requires_reason(workflow):
    workflow.submit()
    for reason in (None, "", "   "):
        with pytest.raises(ReturnReasonRequiredError):
            workflow.return_to_draft(reason)
    assert workflow.status == AuditStatus.SUBMITTED


def test_return_from_l1_keeps_reason(workflow):
    workflow.submit()
    workflow.approve()
    transition = workflow.return_to_draft("  Missing invoices  ")

    assert transition.reason == "Missing invoices"
    assert transition.from_status == AuditStatus.L1_APPROVED
    assert workflow.status == AuditStatus.DRAFT
    assert workflow.status_message() == "Data was returned. Reason: Missing invoices"
    workflow.ensure_editable()


def test_draft_cannot_be_approved_or_returned(workflow):
    with pytest.raises(InvalidTransitionError):
        workflow.approve()
    with pytest.raises(InvalidTransitionError):
        workflow.return_to_draft("why")


def test_unknown_action(workflow):
    with pytest.raises(InvalidTransitionError) as excinfo:
        workflow.perform("publish")
    assert excinfo.value.action == "publish"
    assert excinfo.value.status == AuditStatus.DRAFT


def test_listeners_and_history(workflow):
    seen = []
    workflow.add_listener(seen.append)

    workflow.perform(SUBMIT)
    workflow.perform(RETURN, "Wrong month")

    assert [t.action for t in seen] == [SUBMIT, RETURN]
    assert workflow.history == seen
    assert seen[0].page == "Stationary combustion"
    assert seen[1].to_status == AuditStatus.DRAFT


def test_status_percentages():
    assert STATUS_PERCENTAGE == {
        AuditStatus.DRAFT: 0,
        AuditStatus.SUBMITTED: 50,
        AuditStatus.L1_APPROVED: 75,
        AuditStatus.L2_APPROVED: 100,
    }


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Draft", AuditStatus.DRAFT),
        (" L1Approved ", AuditStatus.L1_APPROVED),
        ("Pending", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_status(value, expected):
    assert parse_status(value) is expected


def test_failing_listener_leaves_status_unchanged(workflow):
    def locked_database(transition):
        raise RuntimeError("database is locked")

    workflow.add_listener(locked_database)
    with pytest.raises(RuntimeError):
        workflow.submit()

    assert workflow.status == AuditStatus.DRAFT
    assert workflow.history == []
    assert workflow.available_actions() == [SUBMIT]


def test_failing_listener_keeps_previous_return_reason(workflow):
    calls = []

    def flaky(transition):
        calls.append(transition.action)
        if transition.reason == "second":
            raise RuntimeError("database is locked")

    workflow.add_listener(flaky)
    workflow.submit()
    workflow.return_to_draft("first")
    workflow.submit()
    with pytest.raises(RuntimeError):
        workflow.return_to_draft("second")

    assert workflow.status == AuditStatus.SUBMITTED
    assert workflow.last_return_reason == "first"
    assert len(workflow.history) == 3
