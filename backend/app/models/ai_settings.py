"""AI settings model - persisted so provider and key survive a restart."""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from app.database import Base

KEY_FIELDS = {
    "openai": "openai_api_key",
    "openrouter": "openrouter_api_key",
    "anthropic": "anthropic_api_key",
}


class AISettingsRecord(Base):
    """
    AI settings stored in database.
    Singleton pattern - only one row with id=1. Null columns mean
    "use the value from the environment"; an empty key means it was cleared.
    """
    __tablename__ = "ai_settings"

    id = Column(Integer, primary_key=True, default=1)

    provider = Column(String(50), nullable=True)
    model = Column(String(200), nullable=True)
    vision_model = Column(String(200), nullable=True)

    openai_api_key = Column(String(500), nullable=True)
    openrouter_api_key = Column(String(500), nullable=True)
    anthropic_api_key = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


def get_or_create_ai_settings(db) -> AISettingsRecord:
    """Get the singleton AI settings row, creating an empty one if needed."""
    record = db.query(AISettingsRecord).filter(AISettingsRecord.id == 1).first()
    if not record:
        record = AISettingsRecord(id=1)
        db.add(record)
        db.commit()
        db.refresh(record)
    return record


def apply_saved_ai_settings(db, settings) -> bool:
    """
    Copy stored values onto the runtime settings object.
    Returns False when nothing has been saved yet.
    """
    record = db.query(AISettingsRecord).filter(AISettingsRecord.id == 1).first()
    if not record:
        return False

    for field in ("provider", "model", "vision_model"):
        value = getattr(record, field)
        if value is not None:
            setattr(settings, f"ai_{field}", value)
    for key_field in KEY_FIELDS.values():
        value = getattr(record, key_field)
        if value is not None:
            setattr(settings, key_field, value or None)
    return True
