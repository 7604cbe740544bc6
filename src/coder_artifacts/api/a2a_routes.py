"""A2A discovery routes for FastAPI."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from coder_artifacts.a2a.agent_card import get_agent_card

a2a_router = APIRouter(tags=["A2A Protocol"])


@a2a_router.get(
    "/.well-known/agent-card.json",
    summary="Get agent card",
    description="Returns the A2A agent card describing this agent's capabilities.",
    response_class=JSONResponse,
)
@a2a_router.get(
    "/.well-known/agent.json",
    include_in_schema=False,
    response_class=JSONResponse,
)
async def get_agent_card_endpoint(request: Request) -> dict:
    """
    Return the agent card for A2A discovery.

    The legacy agent.json path serves the same document.
    """
    base_url = str(request.base_url).rstrip("/")
    card = get_agent_card(base_url=base_url)
    return card.model_dump(exclude_none=True)
