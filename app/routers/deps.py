from fastapi import Request

from app.services.gateway import GatewayService


def get_gateway(request: Request) -> GatewayService:
    return request.app.state.gateway
