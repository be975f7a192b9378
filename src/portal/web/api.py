"""JSON API endpoints. These do not touch the session store."""

from fastapi import APIRouter

from portal.config.settings import get_settings
from portal.pricing import estimate_cost

api_router = APIRouter(prefix="/api", tags=["api"])


@api_router.api_route("/calculate", methods=["GET", "POST"])
async def calculate() -> dict:
    """Return a randomized treatment cost estimate."""
    settings = get_settings()
    cost = estimate_cost(minimum=settings.cost_min, span=settings.cost_span)
    return {"success": True, "cost": cost}
