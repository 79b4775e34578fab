"""FastAPI dependencies giving routes access to the shared services."""

from typing import Annotated, Any

from fastapi import Body, Depends, Request

from dsc_api.services import EngineService, ServiceContainer, TokenService


def get_services(request: Request) -> ServiceContainer:
    """Service container created in the application lifespan."""
    return request.app.state.services


Services = Annotated[ServiceContainer, Depends(get_services)]


def get_token_service(services: Services) -> TokenService:
    return services.token


def get_engine_service(services: Services) -> EngineService:
    return services.engine


TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
EngineServiceDep = Annotated[EngineService, Depends(get_engine_service)]

# JSON object body, validated field by field in the route
RequestBody = Annotated[dict[str, Any], Body()]
