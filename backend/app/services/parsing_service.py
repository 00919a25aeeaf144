"""Service for turning free text and screenshots into subscription drafts."""

import base64
import binascii
import json
import logging
import re
from datetime import date
from typing import Any, Dict, Optional, Tuple

from app.ai.client import get_ai_client
from app.ai.prompts import (
    SUBSCRIPTION_PARSING_SYSTEM,
    SUBSCRIPTION_PARSING_TEXT_USER,
    SUBSCRIPTION_PARSING_IMAGE_USER,
)
from app.schemas.subscription import SubscriptionDraft
from app.services.errors import ParseError
from app.services.normalizer import normalize_fields

logger = logging.getLogger(__name__)

DATA_URL = re.compile(r"^data:(?P<mime>image/[\w.+-]+);base64,(?P<data>.+)$", re.DOTALL)


def _system_prompt(today: date) -> str:
    return SUBSCRIPTION_PARSING_SYSTEM.format(today=today.isoformat())


def _ensure_mapping(result: Any) -> Dict[str, Any]:
    if not isinstance(result, dict):
        raise ParseError("AI response was not a JSON object")
    return result


async def parse_freeform_text(
    text: str,
    api_key: Optional[str] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Ask the model to extract subscription fields from free text.

    Returns:
        The raw field mapping, unvalidated.

    Raises:
        ParseError: empty input, transport failure, or output that is not a JSON object.
    """
    if not text or not text.strip():
        raise ParseError("Nothing to parse")

    client = get_ai_client()
    try:
        result = await client.complete_json(
            system_prompt=_system_prompt(today or date.today()),
            user_prompt=SUBSCRIPTION_PARSING_TEXT_USER.format(input_text=text.strip()),
            temperature=0.1,
            max_tokens=300,
            api_key=api_key,
        )
    except json.JSONDecodeError as e:
        logger.error(f"AI returned non-JSON for text input: {e}")
        raise ParseError("Sorry, couldn't parse that. Please try rephrasing or use the manual form.", e)
    except Exception as e:
        logger.error(f"Text parsing failed: {e}")
        raise ParseError("Sorry, couldn't parse that. Please try again or use the manual form.", e)

    logger.info(f"AI parsed text: {result}")
    return _ensure_mapping(result)


async def parse_image(
    image_bytes: bytes,
    mime_type: str = "image/png",
    api_key: Optional[str] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Ask a vision model to extract subscription fields from a screenshot.
    Same failure contract as ``parse_freeform_text``.
    """
    if not image_bytes:
        raise ParseError("Image data is required")

    client = get_ai_client()
    try:
        result = await client.complete_vision_json(
            system_prompt=_system_prompt(today or date.today()),
            user_prompt=SUBSCRIPTION_PARSING_IMAGE_USER,
            image_bytes=image_bytes,
            mime_type=mime_type,
            api_key=api_key,
        )
    except json.JSONDecodeError as e:
        logger.error(f"AI returned non-JSON for screenshot: {e}")
        raise ParseError("Sorry, couldn't parse that screenshot. Please try the text input instead.", e)
    except Exception as e:
        logger.error(f"Screenshot parsing failed: {e}")
        raise ParseError("Sorry, couldn't parse that screenshot. Please try again or use the text input.", e)

    logger.info(f"AI parsed screenshot: {result}")
    return _ensure_mapping(result)


def decode_image_data_url(value: str) -> Tuple[bytes, str]:
    """
    Split a ``data:image/...;base64,...`` URL (or bare base64) into bytes and mime type.

    Raises:
        ParseError: if the payload is not valid base64.
    """
    value = value.strip()
    mime_type = "image/png"
    match = DATA_URL.match(value)
    if match:
        mime_type = match.group("mime")
        value = match.group("data")

    try:
        return base64.b64decode(value, validate=True), mime_type
    except (binascii.Error, ValueError) as e:
        raise ParseError("Image data is not valid base64", e)


async def draft_from_text(
    text: str,
    api_key: Optional[str] = None,
    today: Optional[date] = None,
) -> SubscriptionDraft:
    """Parse free text and normalize the result into a draft."""
    today = today or date.today()
    raw = await parse_freeform_text(text, api_key=api_key, today=today)
    return normalize_fields(raw, today=today, source="input")


async def draft_from_image(
    image_bytes: bytes,
    mime_type: str = "image/png",
    api_key: Optional[str] = None,
    today: Optional[date] = None,
) -> SubscriptionDraft:
    """Parse a screenshot and normalize the result into a draft."""
    today = today or date.today()
    raw = await parse_image(image_bytes, mime_type=mime_type, api_key=api_key, today=today)
    return normalize_fields(raw, today=today, source="screenshot")
