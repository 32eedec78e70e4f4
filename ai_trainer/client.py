"""
Async client for the AI trainer endpoint.

Plays the part of the app screens that call the trainer: decides whether
to send the user's own key, trims chat history, stamps received plans with
generatedAt, and turns error bodies back into typed exceptions.
"""
from datetime import datetime, timezone
from typing import Optional

import httpx
from pydantic import BaseModel

from ai_trainer.core.config import settings
from ai_trainer.core.errors import (
    ERRORS_BY_CODE,
    InvalidRequest,
    QuotaExceeded,
    RateLimited,
    TrainerError,
    UpstreamError,
)
from ai_trainer.core.logger import log_error, logger
from ai_trainer.models.plans import ChatMessage, ChatReply, DietPlan, WorkoutPlan
from ai_trainer.models.profile import UserProfile

ERRORS_BY_STATUS = {
    429: RateLimited,
    402: QuotaExceeded,
}


class CredentialPreference(BaseModel):
    """The user's saved choice to use their own AI gateway key."""

    preferCustomCredential: bool = False
    credential: Optional[str] = None

    def override(self) -> Optional[str]:
        """Key to send as customApiKey, or None to use the server default."""
        if self.preferCustomCredential and self.credential and self.credential.strip():
            return self.credential.strip()
        return None


def trim_history(messages: list[ChatMessage], limit: int = None) -> list[ChatMessage]:
    """Keep only the most recent turns."""
    limit = settings.CHAT_HISTORY_LIMIT if limit is None else limit
    if limit <= 0:
        return []
    return list(messages[-limit:])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def error_from_response(response: httpx.Response) -> TrainerError:
    """
    Rebuild the typed error from a failed trainer response.

    Bodies carrying a "code" map straight back to their error class. Without
    one, 429/402 keep their meaning, any other 4xx is a rejection of the
    request itself (e.g. FastAPI's 422 validation body), and the rest is an
    upstream failure.
    """
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    message = body.get("error")
    status = response.status_code
    error_cls = ERRORS_BY_CODE.get(body.get("code")) or ERRORS_BY_STATUS.get(status)

    if error_cls is None and 400 <= status < 500:
        error_cls = InvalidRequest
    if error_cls is InvalidRequest:
        detail = body.get("detail")
        if message is None and detail is not None:
            message = detail if isinstance(detail, str) else f"Trainer request was rejected ({status})"
        return InvalidRequest(message, detail=detail)
    if error_cls is UpstreamError or error_cls is None:
        upstream_status = body.get("status") if body.get("code") else status
        return UpstreamError(message, status=upstream_status)
    return error_cls(message)


class TrainerClient:
    """
    Calls POST /ai-trainer on behalf of one user.

    Args:
        base_url: Root URL of the trainer service
        preference: Credential preference; server default key when omitted
        timeout: Seconds to wait for one plan
        transport: Optional httpx transport (tests mount the ASGI app here)
    """

    def __init__(
        self,
        base_url: str,
        preference: CredentialPreference = None,
        timeout: float = None,
        transport: httpx.AsyncBaseTransport = None,
    ):
        self.base_url = base_url
        self.preference = preference or CredentialPreference()
        self.timeout = timeout or settings.AI_REQUEST_TIMEOUT
        self.transport = transport

    async def _post(self, payload: dict) -> dict:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        ) as http:
            try:
                response = await http.post("/ai-trainer", json=payload)
            except httpx.HTTPError as e:
                log_error("Trainer request", e)
                raise UpstreamError(f"Trainer service unreachable: {e}") from e

        if response.is_error:
            raise error_from_response(response)
        return response.json()

    def _payload(self, request_type: str, profile: UserProfile, messages: list[ChatMessage] = None) -> dict:
        payload = {
            "type": request_type,
            "userProfile": profile.model_dump(exclude_none=True),
        }
        if messages is not None:
            payload["messages"] = [m.model_dump() for m in messages]
        custom_api_key = self.preference.override()
        if custom_api_key:
            payload["customApiKey"] = custom_api_key
        return payload

    async def generate_workout(self, profile: UserProfile) -> WorkoutPlan:
        data = await self._post(self._payload("workout", profile))
        logger.info("Workout plan received")
        return WorkoutPlan.model_validate({**data, "generatedAt": _now()})

    async def generate_diet(self, profile: UserProfile) -> DietPlan:
        data = await self._post(self._payload("diet", profile))
        logger.info("Diet plan received")
        return DietPlan.model_validate({**data, "generatedAt": _now()})

    async def chat(self, profile: UserProfile, history: list[ChatMessage]) -> ChatReply:
        """
        Ask the coach a question.

        Args:
            profile: User profile
            history: Whole conversation, newest last; only the most recent
                CHAT_HISTORY_LIMIT turns are sent

        Returns:
            Coach reply stamped with generatedAt
        """
        data = await self._post(self._payload("chat", profile, trim_history(history)))
        return ChatReply.model_validate({**data, "generatedAt": _now()})
