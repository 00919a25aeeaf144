import base64
import logging
import litellm
from typing import Optional, Dict, Any, List, Union
import json

from app.config import settings

logger = logging.getLogger(__name__)

litellm.drop_params = True

Content = Union[str, List[Dict[str, Any]]]


class AIClient:

    def __init__(self):
        self.provider = settings.ai_provider
        self.model = self._get_model_string(settings.ai_model)
        self.vision_model = self._get_model_string(settings.ai_vision_model or settings.ai_model)
        self.api_base = self._get_api_base()

    def _get_model_string(self, model: str) -> str:
        if self.provider == "openrouter":
            if not model.startswith("openrouter/"):
                return f"openrouter/{model}"
            return model
        elif self.provider == "ollama":
            if not model.startswith("ollama/"):
                return f"ollama/{model}"
            return model
        else:
            return model

    def _get_api_base(self) -> Optional[str]:
        if self.provider == "openrouter":
            return "https://openrouter.ai/api/v1"
        elif self.provider == "ollama":
            return settings.ai_base_url or "http://localhost:11434"
        return settings.ai_base_url

    def _configured_key(self) -> Optional[str]:
        if self.provider == "openrouter":
            return settings.openrouter_api_key
        elif self.provider == "anthropic":
            return settings.anthropic_api_key
        elif self.provider == "openai":
            return settings.openai_api_key
        return None

    async def complete(
        self,
        system_prompt: Optional[str],
        user_content: Content,
        temperature: float = 0.1,
        max_tokens: int = 1000,
        json_mode: bool = False,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_content})

        kwargs: Dict[str, Any] = {
            "model": model or self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "timeout": settings.ai_timeout_seconds,
        }

        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        key = api_key or self._configured_key()
        if key:
            kwargs["api_key"] = key
        if self.api_base:
            kwargs["api_base"] = self.api_base

        try:
            response = await litellm.acompletion(**kwargs)
        except Exception as e:
            logger.error(f"AI completion error: {e}")
            raise

        content = response.choices[0].message.content
        if not content or not content.strip():
            raise ValueError("Empty response from AI provider")
        return content

    @staticmethod
    def _load_json(response: str) -> Dict[str, Any]:
        cleaned = response.strip()
        if cleaned.startswith("```json"):
            cleaned = cleaned[7:]
        if cleaned.startswith("```"):
            cleaned = cleaned[3:]
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3]

        return json.loads(cleaned.strip())

    async def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.1,
        max_tokens: int = 1000,
        api_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        response = await self.complete(
            system_prompt=system_prompt,
            user_content=user_prompt,
            temperature=temperature,
            max_tokens=max_tokens,
            json_mode=True,
            api_key=api_key,
        )
        return self._load_json(response)

    async def complete_vision_json(
        self,
        system_prompt: str,
        user_prompt: str,
        image_bytes: bytes,
        mime_type: str = "image/png",
        temperature: float = 0.1,
        max_tokens: int = 300,
        api_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        data_url = f"data:{mime_type};base64,{base64.b64encode(image_bytes).decode('ascii')}"
        content = [
            {"type": "text", "text": user_prompt},
            {"type": "image_url", "image_url": {"url": data_url}},
        ]
        response = await self.complete(
            system_prompt=system_prompt,
            user_content=content,
            temperature=temperature,
            max_tokens=max_tokens,
            api_key=api_key,
            model=self.vision_model,
        )
        return self._load_json(response)


_ai_client: Optional[AIClient] = None

def get_ai_client() -> AIClient:
    global _ai_client
    if _ai_client is None:
        _ai_client = AIClient()
    return _ai_client


def reset_ai_client() -> None:
    """Drop the cached client so the next call picks up changed settings."""
    global _ai_client
    _ai_client = None
