# inventory/workflow.py
import datetime as dt
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from .exceptions import (
    InvalidTransitionError,
    InventoryLockedError,
    ReturnReasonRequiredError,
)

logger = logging.getLogger(__name__)


class AuditStatus(str, Enum):
    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    L1_APPROVED = "L1Approved"
    L2_APPROVED = "L2Approved"


SUBMIT = "submit"
APPROVE = "approve"
RETURN = "return"

ACTION_LABELS = {
    SUBMIT: "Submit for review",
    APPROVE: "Approve",
    RETURN: "Return",
}


@dataclass(frozen=True)
class StatusDisplay:
    label: str
    badge: str
    message: str
    progress: int


STATUS_DISPLAY: Dict[AuditStatus, StatusDisplay] = {
    AuditStatus.DRAFT: StatusDisplay(
        "Draft", "gray", "Status is draft. Activity data can still be edited or added.", 0
    ),
    AuditStatus.SUBMITTED: StatusDisplay(
        "Pending review", "blue", "Data has been submitted. Waiting for the level 1 reviewer.", 50
    ),
    AuditStatus.L1_APPROVED: StatusDisplay(
        "L1 approved", "orange", "Level 1 review passed. Waiting for the final review.", 75
    ),
    AuditStatus.L2_APPROVED: StatusDisplay(
        "L2 approved", "green", "Review complete. The record set is locked.", 100
    ),
}

STATUS_PERCENTAGE = {status: display.progress for status, display in STATUS_DISPLAY.items()}

_NEXT_APPROVAL = {
    AuditStatus.SUBMITTED: AuditStatus.L1_APPROVED,
    AuditStatus.L1_APPROVED: AuditStatus.L2_APPROVED,
}


def parse_status(value: str) -> Optional[AuditStatus]:
    try:
        return AuditStatus(value.strip())
    except (AttributeError, ValueError):
        return None


@dataclass(frozen=True)
class Transition:
    page: str
    action: str
    from_status: AuditStatus
    to_status: AuditStatus
    reason: Optional[str] = None
    timestamp: dt.datetime = field(default_factory=lambda: dt.datetime.now(dt.timezone.utc))


TransitionListener = Callable[[Transition], None]


class ApprovalWorkflow:
    """
    Linear review of one page's record set:

        Draft -> Submitted -> L1Approved -> L2Approved

    Submitted and L1Approved can be returned to Draft with a reason.
    L2Approved is terminal and locks the page.
    """

    def __init__(self, page: str, status: AuditStatus = AuditStatus.DRAFT):
        self.page = page
        self.status = status
        self.last_return_reason: Optional[str] = None
        self.history: List[Transition] = []
        self._listeners: List[TransitionListener] = []

    def add_listener(self, listener: TransitionListener) -> None:
        self._listeners.append(listener)

    @property
    def is_locked(self) -> bool:
        return self.status == AuditStatus.L2_APPROVED

    def ensure_editable(self) -> None:
        if self.is_locked:
            raise InventoryLockedError(
                f"{self.page} is fully approved. Records can no longer be added."
            )

    @property
    def display(self) -> StatusDisplay:
        return STATUS_DISPLAY[self.status]

    def available_actions(self) -> List[str]:
        if self.status == AuditStatus.DRAFT:
            return [SUBMIT]
        if self.status in _NEXT_APPROVAL:
            return [APPROVE, RETURN]
        return []

    def status_message(self) -> str:
        if self.status == AuditStatus.DRAFT and self.last_return_reason:
            return f"Data was returned. Reason: {self.last_return_reason}"
        return self.display.message

    # ---- transitions ----

    def submit(self) -> Transition:
        self._require(SUBMIT)
        return self._move(SUBMIT, AuditStatus.SUBMITTED)

    def approve(self) -> Transition:
        self._require(APPROVE)
        return self._move(APPROVE, _NEXT_APPROVAL[self.status])

    def return_to_draft(self, reason: Optional[str]) -> Transition:
        self._require(RETURN)
        reason = (reason or "").strip()
        if not reason:
            raise ReturnReasonRequiredError("A reason is required to return the data.")
        transition = self._move(RETURN, AuditStatus.DRAFT, reason)
        self.last_return_reason = reason
        return transition

    def perform(self, action: str, reason: Optional[str] = None) -> Transition:
        if action == SUBMIT:
            return self.submit()
        if action == APPROVE:
            return self.approve()
        if action == RETURN:
            return self.return_to_draft(reason)
        raise InvalidTransitionError(action, self.status)

    def _require(self, action: str) -> None:
        if action not in self.available_actions():
            raise InvalidTransitionError(action, self.status)

    def _move(self, action: str, to_status: AuditStatus, reason: Optional[str] = None) -> Transition:
        """Notify listeners first; if one raises, the status and history stay as they were."""
        transition = Transition(
            page=self.page,
            action=action,
            from_status=self.status,
            to_status=to_status,
            reason=reason,
        )
        for listener in self._listeners:
            listener(transition)

        self.status = to_status
        self.history.append(transition)
        logger.info(
            "%s: %s %s -> %s", self.page, action, transition.from_status.value, to_status.value
        )
        return transition
