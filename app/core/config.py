from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, List, Optional

from app.llm.types import PermissionSet, ProviderSettings

DEFAULT_SYSTEM_PROMPT = (
    "You are an AI assistant for the Life Management Dashboard. "
    "You can help with task management, scheduling, and providing insights."
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    APP_NAME: str = "Life Dashboard AI Gateway"
    APP_ENV: str = "dev"
    API_PREFIX: str = "/v1"
    CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"
    # Generation defaults
    DEFAULT_TEMPERATURE: float = 0.7
    LLM_TIMEOUT_MS: int = 30000
    SYSTEM_PROMPT: str = DEFAULT_SYSTEM_PROMPT
    MAX_CONTEXT_LENGTH: int = 2000
    # Providers
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_DEFAULT_MODEL: str = "gpt-3.5-turbo"
    OPENAI_TEMPERATURE: float = 0.7
    OPENAI_MAX_TOKENS: int = 1000
    HUGGINGFACE_API_KEY: Optional[str] = None
    HUGGINGFACE_BASE_URL: str = "https://api-inference.huggingface.co"
    HUGGINGFACE_DEFAULT_MODEL: str = "gpt2"
    HUGGINGFACE_TEMPERATURE: float = 0.7
    HUGGINGFACE_MAX_TOKENS: int = 100
    COHERE_API_KEY: Optional[str] = None
    COHERE_BASE_URL: str = "https://api.cohere.ai/v1"
    COHERE_DEFAULT_MODEL: str = "command"
    COHERE_TEMPERATURE: float = 0.7
    COHERE_MAX_TOKENS: int = 100
    STABILITY_API_KEY: Optional[str] = None
    STABILITY_BASE_URL: str = "https://api.stability.ai/v1"
    STABILITY_DEFAULT_MODEL: str = "stable-diffusion-xl-1024-v1-0"
    STABILITY_CFG_SCALE: float = 7
    STABILITY_HEIGHT: int = 1024
    STABILITY_WIDTH: int = 1024
    STABILITY_STEPS: int = 30
    REPLICATE_API_KEY: Optional[str] = None
    REPLICATE_BASE_URL: str = "https://api.replicate.com/v1"
    REPLICATE_DEFAULT_MODEL: str = "stability-ai/stable-diffusion"
    REPLICATE_TEMPERATURE: float = 0.7
    REPLICATE_MAX_TOKENS: int = 100
    OLLAMA_BASE_URL: str = "http://localhost:11434/api"
    OLLAMA_DEFAULT_MODEL: str = "llama2"
    OLLAMA_TEMPERATURE: float = 0.7
    OLLAMA_MAX_TOKENS: int = 100
    LOCALAI_BASE_URL: str = "http://localhost:8080/v1"
    LOCALAI_DEFAULT_MODEL: str = "gpt-3.5-turbo"
    LOCALAI_TEMPERATURE: float = 0.7
    LOCALAI_MAX_TOKENS: int = 100
    # Which providers get registered at start-up (JSON object in env)
    MODEL_AVAILABILITY: Dict[str, bool] = {
        "openai": False,
        "huggingface": True,
        "cohere": True,
        "stability": True,
        "replicate": True,
        "ollama": False,
        "localai": False,
    }
    # Permissions and rate limiting
    ALLOWED_ACTIONS: List[str] = ["updateUI", "modifyLayout", "accessData", "suggestChanges", "executeCommands"]
    ALLOW_INTERFACE_CHANGES: bool = True
    ALLOW_BACKEND_ACCESS: bool = True
    MAX_REQUESTS_PER_MINUTE: int = 60
    # Dashboard backend
    BACKEND_BASE_URL: str = "http://localhost:3000"
    BACKEND_UI_UPDATE_PATH: str = "/api/ui/update"
    BACKEND_SYSTEM_COMMANDS_PATH: str = "/api/system"
    BACKEND_AUTH_TOKEN: Optional[str] = None
    BACKEND_TIMEOUT_MS: int = 10000

    @property
    def cors_origin_list(self) -> List[str]:
        val = self.CORS_ORIGINS
        if not val: return []
        if val == "*": return ["*"]
        return [v.strip() for v in val.split(",")]

    def provider_settings(self, name: str) -> ProviderSettings:
        prefix = name.upper()
        values = {
            "api_key": getattr(self, f"{prefix}_API_KEY", None),
            "base_url": getattr(self, f"{prefix}_BASE_URL"),
            "default_model": getattr(self, f"{prefix}_DEFAULT_MODEL"),
            "system_prompt": self.SYSTEM_PROMPT,
            "timeout_s": self.LLM_TIMEOUT_MS / 1000.0,
        }
        for field in ("TEMPERATURE", "MAX_TOKENS", "CFG_SCALE", "HEIGHT", "WIDTH", "STEPS"):
            val = getattr(self, f"{prefix}_{field}", None)
            if val is not None:
                values[field.lower()] = val
        return ProviderSettings(**values)

    def permission_set(self) -> PermissionSet:
        return PermissionSet(
            allowed_actions=frozenset(self.ALLOWED_ACTIONS),
            allow_interface_changes=self.ALLOW_INTERFACE_CHANGES,
            allow_backend_access=self.ALLOW_BACKEND_ACCESS,
            max_requests_per_minute=self.MAX_REQUESTS_PER_MINUTE,
        )

settings = Settings()
