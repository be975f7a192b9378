"""Patient views: scans, treatment plan, clinic offers and follow-ups."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import Response

from portal.session import Role
from portal.web.deps import PortalSession, redirect, render, require_role, save_session

logger = logging.getLogger(__name__)

patient_router = APIRouter(prefix="/patient", tags=["patient"])

PatientSession = Annotated[PortalSession, Depends(require_role(Role.PATIENT))]


@patient_router.get("/scans")
def scans(request: Request, session: PatientSession) -> Response:
    return render(request, "patient_scans.html", session)


@patient_router.get("/plan")
def plan(request: Request, session: PatientSession) -> Response:
    return render(request, "patient_plan.html", session)


@patient_router.get("/criteria")
def criteria(request: Request, session: PatientSession) -> Response:
    return render(request, "patient_criteria.html", session)


@patient_router.get("/offers")
def offers(request: Request, session: PatientSession) -> Response:
    return render(request, "patient_offers.html", session)


@patient_router.post("/offers")
def choose_offer(
    request: Request,
    session: PatientSession,
    clinic: Annotated[str, Form()] = "",
) -> Response:
    """Remember the chosen clinic for the consultations view."""
    session.state.selection = clinic.strip() or None
    logger.info("Patient selected clinic offer: %s", session.state.selection)
    response = redirect("/patient/consultations")
    save_session(request, response, session)
    return response


@patient_router.get("/consultations")
def consultations(request: Request, session: PatientSession) -> Response:
    selected = None
    if session.state.selection:
        selected = next(
            (
                offer
                for offer in session.state.records.offers
                if offer.clinic == session.state.selection
            ),
            None,
        )
    return render(request, "patient_consultations.html", session, selected_offer=selected)


@patient_router.get("/reviews")
def reviews(request: Request, session: PatientSession) -> Response:
    return render(request, "patient_reviews.html", session)
