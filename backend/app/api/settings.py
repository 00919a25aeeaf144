from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.schemas.settings import (
    AISettings,
    AISettingsUpdate,
    SchedulingSettings,
    SettingsResponse,
    AvailableProvider
)
from app.ai.client import get_ai_client, reset_ai_client
from app.ai.prompts import API_KEY_TEST_USER
from app.config import settings
from app.dependencies import get_db
from app.models.ai_settings import KEY_FIELDS, get_or_create_ai_settings

router = APIRouter(prefix="/settings", tags=["settings"])

AVAILABLE_PROVIDERS = [
    AvailableProvider(
        id="openai",
        name="OpenAI",
        requires_key=True,
        models=[
            "gpt-4.1",
            "gpt-4.1-mini",
            "gpt-4o",
            "gpt-4o-mini",
        ]
    ),
    AvailableProvider(
        id="openrouter",
        name="OpenRouter",
        requires_key=True,
        models=[
            "openai/gpt-4o-mini",
            "openai/gpt-4o",
            "anthropic/claude-3-haiku",
            "google/gemini-flash-1.5",
        ]
    ),
    AvailableProvider(
        id="anthropic",
        name="Anthropic",
        requires_key=True,
        models=[
            "claude-3-haiku-20240307",
            "claude-3-sonnet-20240229",
        ]
    ),
    AvailableProvider(
        id="ollama",
        name="Ollama (Local)",
        requires_key=False,
        models=[
            "llama3.2-vision:11b",
            "llama3.1:8b",
        ]
    ),
]

def _current_ai_settings() -> AISettings:
    key_field = KEY_FIELDS.get(settings.ai_provider)
    return AISettings(
        provider=settings.ai_provider,
        model=settings.ai_model,
        vision_model=settings.ai_vision_model,
        has_api_key=bool(key_field and getattr(settings, key_field)),
    )


@router.get("", response_model=SettingsResponse)
def get_settings():
    return SettingsResponse(
        ai=_current_ai_settings(),
        scheduling=SchedulingSettings(
            rollover_enabled=settings.rollover_enabled,
            rollover_interval_seconds=settings.rollover_interval_seconds,
            upcoming_limit=settings.upcoming_limit,
        ),
        available_providers=AVAILABLE_PROVIDERS
    )


@router.patch("/ai", response_model=AISettings)
def update_ai_settings(update: AISettingsUpdate, db: Session = Depends(get_db)):
    """Change the AI provider, models or key. Saved values are reloaded at startup."""
    if update.provider is not None and update.provider not in {p.id for p in AVAILABLE_PROVIDERS}:
        raise HTTPException(status_code=422, detail=f"Unknown provider: {update.provider}")

    provider = update.provider or settings.ai_provider
    key_field = KEY_FIELDS.get(provider)
    if update.api_key is not None and key_field is None:
        raise HTTPException(status_code=422, detail=f"{provider} does not use an API key")

    saved = get_or_create_ai_settings(db)
    if update.provider is not None:
        settings.ai_provider = saved.provider = update.provider
    if update.model is not None:
        settings.ai_model = saved.model = update.model
    if update.vision_model is not None:
        settings.ai_vision_model = saved.vision_model = update.vision_model
    if update.api_key is not None:
        setattr(saved, key_field, update.api_key)
        setattr(settings, key_field, update.api_key or None)

    db.commit()
    reset_ai_client()

    return _current_ai_settings()


@router.post("/ai/test")
async def test_ai_connection():
    try:
        client = get_ai_client()
        response = await client.complete(
            system_prompt=None,
            user_content=API_KEY_TEST_USER,
            temperature=0.7,
            max_tokens=100
        )
        return {"status": "ok", "response": response.strip()}
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"AI connection failed: {str(e)}")
