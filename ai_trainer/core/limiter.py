"""
Rate limiter configuration.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from ai_trainer.core.config import settings

# Rate limiter: keyed on client IP, every AI call costs gateway credits
limiter = Limiter(key_func=get_remote_address)

TRAINER_LIMIT = settings.RATE_LIMIT
