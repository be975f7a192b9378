"""HTTP views for the portal."""

from portal.web.api import api_router
from portal.web.auth import auth_router
from portal.web.clinic import clinic_router
from portal.web.deps import LoginRequired
from portal.web.government import government_router
from portal.web.patient import patient_router

__all__ = [
    "LoginRequired",
    "api_router",
    "auth_router",
    "clinic_router",
    "government_router",
    "patient_router",
]
