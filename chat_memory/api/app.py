"""FastAPI 应用：把 HTTP 请求路由到对应会话的 SessionActor。"""

from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from chat_memory.api import service
from chat_memory.api.requests import parse_chat_request
from chat_memory.domain.exceptions import ValidationError
from chat_memory.domain.models import format_timestamp, utc_now
from chat_memory.sessions import SessionRegistry


SERVICE_NAME = "Chat Memory Service"
# 未指定 session 参数时的路由策略，核心逻辑不对任何 session_id 做特殊处理
DEFAULT_SESSION_ID = "default"

router = APIRouter(prefix="/api")


def _registry(request: Request) -> SessionRegistry:
    registry = getattr(request.app.state, "registry", None)
    return registry or service.get_default_registry()


@router.post("/chat")
async def chat(request: Request, session: Optional[str] = None):
    session_id = session or DEFAULT_SESSION_ID
    try:
        payload = await request.json()
    except ValueError:
        return JSONResponse({"success": False, "error": "Invalid request format"}, status_code=400)
    try:
        command = parse_chat_request(payload)
        body = await service.execute(session_id, command, _registry(request))
    except ValidationError as e:
        return JSONResponse({"success": False, "error": e.message}, status_code=e.http_status)
    return JSONResponse(body, status_code=200 if body["success"] else 500)


@router.get("/history")
async def history(request: Request, session: Optional[str] = None):
    return await service.get_history(session or DEFAULT_SESSION_ID, _registry(request))


@router.get("/health")
async def health():
    return {
        "status": "healthy",
        "timestamp": format_timestamp(utc_now()),
        "service": SERVICE_NAME,
        "components": {
            "ai": "operational",
            "storage": "operational",
            "memory": "operational",
        },
    }


def create_app(registry: Optional[SessionRegistry] = None) -> FastAPI:
    """创建应用；registry 为空时使用 service 中按配置构建的默认实例。"""
    app = FastAPI(title=SERVICE_NAME)
    app.state.registry = registry
    app.include_router(router)
    return app
