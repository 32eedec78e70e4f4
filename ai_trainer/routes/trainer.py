"""
AI trainer routes: plan generation, coach chat and energy estimates.
"""
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ai_trainer.core.errors import TrainerError
from ai_trainer.core.limiter import TRAINER_LIMIT, limiter
from ai_trainer.core.logger import log_error, log_request, log_response
from ai_trainer.models.plans import PlanRequest
from ai_trainer.models.profile import UserProfile
from ai_trainer.services import gateway
from ai_trainer.services.metabolic import estimate_energy

router = APIRouter()


@router.post("/ai-trainer")
@limiter.limit(TRAINER_LIMIT)
async def ai_trainer(request: Request, req: PlanRequest):
    """
    Generate a weekly workout plan, a daily diet plan, or a coach reply.

    Upstream failures come back as {"error", "code"} with 429 (rate limited),
    402 (quota exceeded), 500 (not configured) or 502 (gateway failure or
    unreadable plan).
    """
    log_request("/ai-trainer", kind=req.type)
    started = time.perf_counter()

    try:
        plan = await gateway.request_plan(req)
    except TrainerError as e:
        log_error(f"{req.type} generation", e)
        log_response("/ai-trainer", e.code, (time.perf_counter() - started) * 1000)
        return JSONResponse(status_code=e.status_code, content=e.to_dict())

    log_response("/ai-trainer", "success", (time.perf_counter() - started) * 1000)
    return plan.model_dump(exclude_none=True)


@router.post("/energy-estimate")
async def energy_estimate(profile: UserProfile):
    """BMR, TDEE and target calories for a profile."""
    log_request("/energy-estimate")
    return estimate_energy(profile).model_dump()
