"""
AI gateway service: forwards trainer requests to the hosted model.
"""
import json

import openai
from openai import AsyncOpenAI
from pydantic import ValidationError

from ai_trainer.core.config import settings
from ai_trainer.core.errors import (
    ConfigurationError,
    MalformedPlan,
    QuotaExceeded,
    RateLimited,
    UpstreamError,
)
from ai_trainer.core.logger import logger, log_ai_call, log_error
from ai_trainer.models.plans import PLAN_MODELS, ChatReply, PlanRequest, PlanResponse
from ai_trainer.services.prompts import build_messages

_decoder = json.JSONDecoder()


def resolve_api_key(custom_api_key: str = None) -> str:
    """
    Pick the credential for one call.

    A non-empty caller override wins over the configured default.

    Raises:
        ConfigurationError: If neither is available
    """
    if custom_api_key and custom_api_key.strip():
        return custom_api_key.strip()
    if settings.AI_GATEWAY_API_KEY:
        return settings.AI_GATEWAY_API_KEY
    raise ConfigurationError()


def _build_client(api_key: str) -> AsyncOpenAI:
    # One client per call: the credential can differ between callers.
    # SDK retries are off, failures go straight back to the caller.
    return AsyncOpenAI(
        api_key=api_key,
        base_url=settings.AI_GATEWAY_URL,
        max_retries=0,
        timeout=openai.Timeout(
            settings.AI_REQUEST_TIMEOUT,
            connect=settings.AI_CONNECT_TIMEOUT,
        ),
    )


def map_upstream_error(error: openai.APIError) -> Exception:
    """Translate an SDK failure into the trainer error taxonomy."""
    if isinstance(error, openai.APIStatusError):
        status = error.status_code
        if status == 429:
            return RateLimited()
        if status == 402:
            return QuotaExceeded()
        return UpstreamError(status=status)
    if isinstance(error, openai.APITimeoutError):
        return UpstreamError("AI gateway timed out")
    return UpstreamError(f"AI gateway unreachable: {error}")


async def call_gateway(messages: list[dict], api_key: str) -> str:
    """
    Send one non-streaming chat completion and return the text content.

    Raises:
        RateLimited, QuotaExceeded, UpstreamError
    """
    log_ai_call("Chat Completion", settings.AI_MODEL)
    client = _build_client(api_key)

    try:
        response = await client.chat.completions.create(
            model=settings.AI_MODEL,
            messages=messages,
            stream=False,
        )
    except openai.APIError as e:
        log_error("AI gateway call", e)
        raise map_upstream_error(e) from e
    finally:
        await client.close()

    if not response.choices or not response.choices[0].message.content:
        raise UpstreamError("AI gateway returned no content")

    return response.choices[0].message.content


def extract_json_object(text: str) -> dict:
    """
    Parse the first top-level JSON object embedded in free text.

    The model tends to wrap its JSON in prose or code fences, sometimes with
    template-like braces such as "{weight}" before the plan. Each "{" is
    tried in order; the first one that decodes to a complete object wins and
    everything after its matching "}" is ignored.

    Raises:
        MalformedPlan: If no position decodes to a JSON object
    """
    start = text.find("{")
    if start == -1:
        raise MalformedPlan("AI response contained no JSON object")

    last_error = None
    while start != -1:
        try:
            parsed, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError as e:
            last_error = e
        else:
            if isinstance(parsed, dict):
                return parsed
        start = text.find("{", start + 1)

    raise MalformedPlan(f"AI response JSON could not be parsed: {last_error.msg}") from last_error


def parse_plan(request_type: str, content: str) -> PlanResponse:
    """Normalize model output into the response shape for the request type."""
    if request_type == "chat":
        return ChatReply(response=content)

    data = extract_json_object(content)
    try:
        return PLAN_MODELS[request_type].model_validate(data)
    except ValidationError as e:
        raise MalformedPlan(
            f"AI response did not match the {request_type} plan shape "
            f"({e.error_count()} errors)"
        ) from e


async def request_plan(request: PlanRequest) -> PlanResponse:
    """
    Generate a workout plan, diet plan or coach reply.

    Args:
        request: Validated trainer request

    Returns:
        WorkoutPlan, DietPlan or ChatReply (without generatedAt)

    Raises:
        ConfigurationError: No credential available
        RateLimited / QuotaExceeded / UpstreamError: Upstream failure
        MalformedPlan: Workout/diet output was not a valid plan
    """
    api_key = resolve_api_key(request.customApiKey)

    history = [m.model_dump() for m in request.messages or []]
    messages = build_messages(request.type, request.userProfile, history)

    content = await call_gateway(messages, api_key)
    plan = parse_plan(request.type, content)

    logger.info(f"{request.type.capitalize()} response generated")
    return plan
