"""Government views."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from portal.session import Role
from portal.web.deps import PortalSession, render, require_role

government_router = APIRouter(prefix="/government", tags=["government"])

GovernmentSession = Annotated[PortalSession, Depends(require_role(Role.GOVERNMENT))]


@government_router.get("/dashboard")
def dashboard(request: Request, session: GovernmentSession) -> Response:
    return render(request, "government_dashboard.html", session)


@government_router.get("/analytics")
def analytics(request: Request, session: GovernmentSession) -> Response:
    return render(request, "government_analytics.html", session)
