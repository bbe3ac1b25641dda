from fastapi import APIRouter, Depends, HTTPException

from app.llm.prompt_templates import parse_ui_changes
from app.routers.deps import get_gateway
from app.schemas.ai import (
    ActiveModelIn,
    ChatIn,
    ChatOut,
    CommandIn,
    ContextValueIn,
    ContextValueOut,
    GenerateIn,
    GenerateOut,
    HealthDataIn,
    InterfaceUpdateIn,
    ModelsOut,
    ScheduleIn,
    TaskSuggestionsIn,
)
from app.services.gateway import GatewayService
from app.services.ui_advisor import UIAdvisor

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/generate", response_model=GenerateOut)
async def generate(payload: GenerateIn, gateway: GatewayService = Depends(get_gateway)):
    text = await gateway.generate_response(payload.prompt, payload.options)
    return GenerateOut(text=text, provider=gateway.active_model)


@router.post("/chat", response_model=ChatOut)
async def chat(payload: ChatIn, gateway: GatewayService = Depends(get_gateway)):
    text = await gateway.generate_response(payload.message, {"context": payload.context})
    return ChatOut(text=text, provider=gateway.active_model, ui_changes=parse_ui_changes(text))


@router.post("/tasks/suggestions", response_model=GenerateOut)
async def task_suggestions(payload: TaskSuggestionsIn, gateway: GatewayService = Depends(get_gateway)):
    text = await gateway.generate_task_suggestions(payload.context)
    return GenerateOut(text=text, provider=gateway.active_model)


@router.post("/schedule/optimize", response_model=GenerateOut)
async def optimize_schedule(payload: ScheduleIn, gateway: GatewayService = Depends(get_gateway)):
    text = await gateway.optimize_schedule(payload.schedule)
    return GenerateOut(text=text, provider=gateway.active_model)


@router.post("/health/recommendations", response_model=GenerateOut)
async def health_recommendations(payload: HealthDataIn, gateway: GatewayService = Depends(get_gateway)):
    text = await gateway.generate_health_recommendations(payload.health_data)
    return GenerateOut(text=text, provider=gateway.active_model)


@router.post("/insights", response_model=GenerateOut)
async def insights(gateway: GatewayService = Depends(get_gateway)):
    text = await gateway.generate_dashboard_insights()
    return GenerateOut(text=text, provider=gateway.active_model)


@router.get("/models", response_model=ModelsOut)
async def list_models(gateway: GatewayService = Depends(get_gateway)):
    return ModelsOut(models=gateway.models(), active=gateway.active_model)


@router.put("/models/active", response_model=ModelsOut)
async def set_active_model(payload: ActiveModelIn, gateway: GatewayService = Depends(get_gateway)):
    gateway.set_active_model(payload.name)
    return ModelsOut(models=gateway.models(), active=gateway.active_model)


@router.get("/context/{key}", response_model=ContextValueOut)
async def get_context(key: str, gateway: GatewayService = Depends(get_gateway)):
    _missing = object()
    value = gateway.context.get(key, _missing)
    if value is _missing:
        raise HTTPException(status_code=404, detail="context_key_not_found")
    return ContextValueOut(key=key, value=value)


@router.put("/context/{key}", response_model=ContextValueOut)
async def put_context(key: str, payload: ContextValueIn, gateway: GatewayService = Depends(get_gateway)):
    gateway.add_context(key, payload.value)
    return ContextValueOut(key=key, value=payload.value)


@router.delete("/context", status_code=204)
async def clear_context(gateway: GatewayService = Depends(get_gateway)):
    gateway.clear_context()


@router.post("/interface")
async def update_interface(payload: InterfaceUpdateIn, gateway: GatewayService = Depends(get_gateway)):
    return await gateway.update_interface(payload.changes)


@router.post("/commands")
async def execute_command(payload: CommandIn, gateway: GatewayService = Depends(get_gateway)):
    return await gateway.execute_command(payload.command)


@router.get("/ui/recommendations")
async def ui_recommendations(gateway: GatewayService = Depends(get_gateway)):
    return await UIAdvisor(gateway).get_ui_recommendations()
