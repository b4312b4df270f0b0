"""Liveness probe of the service."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> dict[str, str | int]:
    """Liveness plus the run phase and the number of connected subscribers."""
    orchestrator = request.app.state.orchestrator
    return {
        "status": "ok",
        "phase": orchestrator.phase.value,
        "subscribers": orchestrator.channel.subscriber_count,
    }
