from pydantic import BaseModel
from typing import Optional, List


class AISettings(BaseModel):
    provider: str
    model: str
    vision_model: str
    has_api_key: bool


class AISettingsUpdate(BaseModel):
    provider: Optional[str] = None
    model: Optional[str] = None
    vision_model: Optional[str] = None
    api_key: Optional[str] = None


class SchedulingSettings(BaseModel):
    rollover_enabled: bool
    rollover_interval_seconds: int
    upcoming_limit: int


class AvailableProvider(BaseModel):
    id: str
    name: str
    requires_key: bool
    models: List[str]


class SettingsResponse(BaseModel):
    ai: AISettings
    scheduling: SchedulingSettings
    available_providers: List[AvailableProvider]
