"""AI prompt templates."""

from app.ai.prompts.subscription_parsing import (
    SUBSCRIPTION_PARSING_SYSTEM,
    SUBSCRIPTION_PARSING_TEXT_USER,
    SUBSCRIPTION_PARSING_IMAGE_USER,
    API_KEY_TEST_USER,
)

__all__ = [
    "SUBSCRIPTION_PARSING_SYSTEM",
    "SUBSCRIPTION_PARSING_TEXT_USER",
    "SUBSCRIPTION_PARSING_IMAGE_USER",
    "API_KEY_TEST_USER",
]
