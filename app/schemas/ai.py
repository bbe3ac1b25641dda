from pydantic import BaseModel, Field
from typing import Optional, List, Any, Dict


class GenerateIn(BaseModel):
    prompt: str = Field(..., min_length=1)
    options: Dict[str, Any] = Field(default_factory=dict)


class GenerateOut(BaseModel):
    text: str
    provider: Optional[str] = None


class ChatIn(BaseModel):
    message: str = Field(..., min_length=1)
    context: Dict[str, Any] = Field(default_factory=dict)


class ChatOut(GenerateOut):
    ui_changes: Optional[Dict[str, Any]] = None


class TaskSuggestionsIn(BaseModel):
    context: Dict[str, Any] = Field(default_factory=dict)


class ScheduleIn(BaseModel):
    schedule: Any


class HealthDataIn(BaseModel):
    health_data: Dict[str, Any]


class ModelsOut(BaseModel):
    models: List[str]
    active: Optional[str] = None


class ActiveModelIn(BaseModel):
    name: str


class ContextValueIn(BaseModel):
    value: Any


class ContextValueOut(BaseModel):
    key: str
    value: Any


class InterfaceUpdateIn(BaseModel):
    changes: Dict[str, Any]


class CommandIn(BaseModel):
    command: Any
