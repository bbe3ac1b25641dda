from typing import Any, Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerationOptions(BaseModel):
    """Options handed to a provider. Unknown keys are passed through untouched."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = Field(None, alias="maxTokens")
    context: Dict[str, Any] = Field(default_factory=dict)

    def passthrough(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class ProviderSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = None
    base_url: str
    default_model: str
    temperature: float = 0.7
    max_tokens: int = 100
    system_prompt: str = ""
    timeout_s: float = 30.0
    # image backends only
    cfg_scale: float = 7
    height: int = 1024
    width: int = 1024
    steps: int = 30


class PermissionSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    allowed_actions: FrozenSet[str] = frozenset()
    allow_interface_changes: bool = True
    allow_backend_access: bool = True
    max_requests_per_minute: int = 60

    def allows(self, action: str) -> bool:
        return action in self.allowed_actions
