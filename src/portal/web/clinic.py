"""Clinic views and incoming plan actions."""

import logging
from collections import Counter
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import Response

from portal.session import PlanAction, PlanStatus, Role
from portal.web.deps import PortalSession, redirect, render, require_role, save_session

logger = logging.getLogger(__name__)

clinic_router = APIRouter(prefix="/clinic", tags=["clinic"])

ClinicSession = Annotated[PortalSession, Depends(require_role(Role.CLINIC))]


def parse_plan_action(plan_id: str, action: str) -> tuple[int, PlanAction] | None:
    """Parse the form fields of a plan action.

    Args:
        plan_id: Raw plan ID from the form.
        action: Raw action tag from the form.

    Returns:
        Tuple of (plan_id, action), or None if either field is invalid.
    """
    try:
        return int(plan_id), PlanAction(action)
    except ValueError:
        logger.debug("Ignoring invalid plan action (plan_id=%r, action=%r)", plan_id, action)
        return None


def status_counts(session: PortalSession) -> dict[str, int]:
    """Count incoming plans per status, including empty statuses."""
    counter = Counter(plan.status for plan in session.state.records.incoming_plans)
    return {status.value: counter.get(status, 0) for status in PlanStatus}


@clinic_router.get("/dashboard")
def dashboard(request: Request, session: ClinicSession) -> Response:
    return render(
        request,
        "clinic_dashboard.html",
        session,
        status_counts=status_counts(session),
    )


@clinic_router.get("/plans")
def plans(request: Request, session: ClinicSession) -> Response:
    return render(request, "clinic_plans.html", session)


@clinic_router.post("/plans")
def plan_action(
    request: Request,
    session: ClinicSession,
    plan_id: Annotated[str, Form()] = "",
    action: Annotated[str, Form()] = "",
) -> Response:
    """Apply a calculate/send action to one incoming plan.

    Invalid input and unknown plan IDs leave the plans untouched.
    """
    parsed = parse_plan_action(plan_id, action)
    if parsed is not None:
        target_id, plan_action = parsed
        if session.state.records.apply_plan_action(target_id, plan_action):
            logger.info(
                "Plan %d -> %s",
                target_id,
                plan_action.target_status.value,
            )

    response = redirect("/clinic/plans")
    save_session(request, response, session)
    return response


@clinic_router.get("/leads")
def leads(request: Request, session: ClinicSession) -> Response:
    return render(request, "clinic_leads.html", session)


@clinic_router.get("/analytics")
def analytics(request: Request, session: ClinicSession) -> Response:
    return render(
        request,
        "clinic_analytics.html",
        session,
        status_counts=status_counts(session),
    )


@clinic_router.get("/pricelist")
def pricelist(request: Request, session: ClinicSession) -> Response:
    return render(request, "clinic_pricelist.html", session)
