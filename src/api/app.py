"""FastAPI app exposing orchestration endpoints."""

import os

from fastapi import Depends, FastAPI, Header, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .schemas import AgentsResponse, ChatRequest, ChatResponse, HealthResponse
from .service import AgentAPIService


def _allowed_origins() -> list[str]:
    raw = os.getenv(
        "AGENT_API_ALLOW_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
    )
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app(service: AgentAPIService | None = None) -> FastAPI:
    app = FastAPI(title="Agent Coordinator API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.agent_service = service

    def get_service() -> AgentAPIService:
        if app.state.agent_service is None:
            app.state.agent_service = AgentAPIService()
        return app.state.agent_service

    @app.get("/health", response_model=HealthResponse)
    def health(agent_service: AgentAPIService = Depends(get_service)) -> HealthResponse:
        return agent_service.health()

    @app.get("/agents", response_model=AgentsResponse)
    def agents(agent_service: AgentAPIService = Depends(get_service)) -> AgentsResponse:
        try:
            return agent_service.agents()
        except Exception as exc:
            raise HTTPException(status_code=500, detail="Internal server error.") from exc

    @app.post("/chat", response_model=ChatResponse)
    async def chat(
        payload: ChatRequest,
        user_id: str | None = Header(default=None),
        agent_service: AgentAPIService = Depends(get_service),
    ) -> ChatResponse:
        try:
            return await agent_service.chat(payload, session=user_id)
        except Exception as exc:
            # Avoid leaking internal error details to clients.
            raise HTTPException(status_code=500, detail="Internal server error.") from exc

    return app


app = create_app()
