import datetime as dt

from inventory import crud
from inventory.workflow import ApprovalWorkflow, AuditStatus, Transition


def _at(minute):
    return dt.datetime(2024, 3, 1, 9, minute, tzinfo=dt.timezone.utc)


def test_log_transition_stores_values(session):
    transition = Transition(
        page="Septic tank",
        action="return",
        from_status=AuditStatus.SUBMITTED,
        to_status=AuditStatus.DRAFT,
        reason="Missing attendance sheet",
        timestamp=_at(5),
    )
    entry = crud.log_transition(session, transition, actor="  ")

    assert entry.id is not None
    assert entry.actor == "unknown"
    assert entry.from_status == "Submitted"
    assert entry.to_status == "Draft"
    assert entry.timestamp == dt.datetime(2024, 3, 1, 9, 5)


def test_list_logs_newest_first_and_filtered(session):
    for minute, page, action in [(1, "Mobile sources", "submit"), (2, "Septic tank", "submit"), (3, "Mobile sources", "approve")]:
        crud.log_transition(
            session,
            Transition(page, action, AuditStatus.DRAFT, AuditStatus.SUBMITTED, timestamp=_at(minute)),
            actor="alice",
        )

    logs = crud.list_logs(session)
    assert [log.action for log in logs] == ["approve", "submit", "submit"]
    assert [log.page for log in crud.list_logs(session, page="Mobile sources")] == ["Mobile sources"] * 2
    assert len(crud.list_logs(session, limit=1)) == 1
    assert crud.list_pages(session) == ["Mobile sources", "Septic tank"]


def test_latest_return_reason_from_workflow(session):
    workflow = ApprovalWorkflow("Business travel")
    workflow.add_listener(lambda t: crud.log_transition(session, t, actor="reviewer"))

    assert crud.latest_return_reason(session, "Business travel") is None

    workflow.submit()
    workflow.return_to_draft("Wrong distance")
    workflow.submit()
    workflow.return_to_draft("Missing invoice")

    assert crud.latest_return_reason(session, "Business travel") == "Missing invoice"
    assert crud.latest_return_reason(session, "Septic tank") is None
    assert len(crud.list_logs(session, page="Business travel")) == 4
