"""Session state and demo domain records."""

import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Portal roles. Determines which views a session may open."""

    NONE = "none"
    PATIENT = "patient"
    CLINIC = "clinic"
    GOVERNMENT = "government"


class PlanStatus(str, Enum):
    """Lifecycle of an incoming treatment plan on the clinic side."""

    NEW = "new"
    CALCULATED = "calculated"
    OFFER_SENT = "offer_sent"
    EXPIRED = "expired"


class PlanAction(str, Enum):
    """Clinic actions on an incoming plan."""

    CALCULATE = "calculate"
    SEND = "send"

    @property
    def target_status(self) -> PlanStatus:
        """Status a plan ends up in after this action."""
        return _ACTION_STATUS[self]


_ACTION_STATUS = {
    PlanAction.CALCULATE: PlanStatus.CALCULATED,
    PlanAction.SEND: PlanStatus.OFFER_SENT,
}


@dataclass
class Scan:
    id: int
    date: str
    status: str
    ai_processed: bool


@dataclass
class Procedure:
    type: str
    position: str
    urgency: str


@dataclass
class TreatmentPlan:
    diagnoses: list[str] = field(default_factory=list)
    procedures: list[Procedure] = field(default_factory=list)


@dataclass
class ClinicOffer:
    clinic: str
    rating: float
    cost: int
    duration: str
    warranty: str
    installment: str
    details: str


@dataclass
class IncomingPlan:
    id: int
    age: int
    gender: str
    date: str
    procedures: str
    status: PlanStatus = PlanStatus.NEW


@dataclass
class Lead:
    id: int
    name: str
    phone: str
    plan: str
    cost: int
    status: str


@dataclass
class DomainRecords:
    """Bundle of demo records carried by a session."""

    scans: list[Scan] = field(default_factory=list)
    treatment_plan: TreatmentPlan = field(default_factory=TreatmentPlan)
    offers: list[ClinicOffer] = field(default_factory=list)
    incoming_plans: list[IncomingPlan] = field(default_factory=list)
    leads: list[Lead] = field(default_factory=list)

    def find_plan(self, plan_id: int) -> IncomingPlan | None:
        """Get an incoming plan by its ID."""
        for plan in self.incoming_plans:
            if plan.id == plan_id:
                return plan
        return None

    def apply_plan_action(self, plan_id: int, action: PlanAction) -> bool:
        """Set the status of the matching incoming plan for the given action.

        Only the status field of the first plan with a matching ID changes;
        the list itself is never reordered or resized. Applying the same
        action twice leaves the same status as applying it once.

        Args:
            plan_id: ID of the incoming plan.
            action: The clinic action to apply.

        Returns:
            True if a plan matched, False if no plan has that ID.
        """
        plan = self.find_plan(plan_id)
        if plan is None:
            logger.debug("No incoming plan with id=%d, ignoring %s", plan_id, action.value)
            return False

        plan.status = action.target_status
        return True

    def plans_with_status(self, status: PlanStatus) -> list[IncomingPlan]:
        """Get all incoming plans currently in the given status."""
        return [plan for plan in self.incoming_plans if plan.status == status]


@dataclass
class SessionState:
    """Mutable state of one portal session.

    A session is anonymous until login() succeeds. Role-specific records
    must only be shown when has_role() is true for that role; the store
    itself does not enforce this.
    """

    role: Role = Role.NONE
    authenticated: bool = False
    last_auth_error: str | None = None
    selection: str | None = None
    records: DomainRecords = field(default_factory=DomainRecords)

    def login(self, role: Role) -> None:
        """Mark the session as authenticated with the given role."""
        self.role = role
        self.authenticated = True
        self.last_auth_error = None

    def logout(self) -> None:
        """Return the session to the anonymous state."""
        self.role = Role.NONE
        self.authenticated = False

    def fail_login(self, message: str) -> None:
        """Record a failed login attempt. The session stays anonymous."""
        self.role = Role.NONE
        self.authenticated = False
        self.last_auth_error = message

    def clear_auth_error(self) -> None:
        self.last_auth_error = None

    def has_role(self, role: Role) -> bool:
        """Check whether the session is authenticated as the given role."""
        return self.authenticated and self.role == role
