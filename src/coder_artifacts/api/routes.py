"""API routes for code extraction and artifacts."""

import logging
import uuid

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from coder_artifacts.artifacts.parser import build_final_message
from coder_artifacts.artifacts.tracker import ArtifactTracker
from coder_artifacts.config import Settings, get_settings
from coder_artifacts.exceptions import InputTooLargeError
from coder_artifacts.extractors.code_blocks import extract_code_blocks
from coder_artifacts.models.code import ArtifactUpdate, ExtractionResult, ParsedArtifacts
from coder_artifacts.observability.logging import LogContext
from coder_artifacts.observability.tracing import stage_span
from coder_artifacts.prompts import CODER_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

router = APIRouter()


class ExtractRequest(BaseModel):
    """Request body for the extract endpoint."""

    text: str = Field(description="Markdown response text, possibly partial")

    model_config = {"json_schema_extra": {"examples": [
        {"text": "Here you go:\n\n```ts hello.ts\nconsole.log('hi');\n```\n\nDone!"}
    ]}}


class ArtifactsRequest(BaseModel):
    """Request body for the artifacts endpoint."""

    text: str = Field(description="Complete response text")
    task_id: str | None = Field(
        default=None,
        description="Task identifier used to build artifact ids (generated if absent)",
    )


class ArtifactsResponse(BaseModel):
    """Artifacts emitted for a complete response."""

    task_id: str
    artifacts: list[ArtifactUpdate]
    parsed: ParsedArtifacts
    message: str = Field(description="Final message summarizing generated files")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class PromptResponse(BaseModel):
    """Coder system prompt."""

    prompt: str


def check_input_size(text: str, settings: Settings) -> None:
    """Reject text larger than the configured limit."""
    if len(text) > settings.max_input_chars:
        raise InputTooLargeError(len(text), settings.max_input_chars)


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Liveness check."""
    return HealthResponse(status="ok", version=settings.api_version)


@router.get(
    "/v1/code/prompt",
    response_model=PromptResponse,
    summary="Get the coder system prompt",
)
async def get_prompt() -> PromptResponse:
    """Return the system prompt describing the expected code block format."""
    return PromptResponse(prompt=CODER_SYSTEM_PROMPT)


@router.post(
    "/v1/code/extract",
    response_model=ExtractionResult,
    summary="Extract code blocks from markdown",
    description=(
        "Parse fenced code blocks (```language filename) out of a response. "
        "Partial responses are accepted; unclosed blocks are returned with done=false."
    ),
)
async def extract(
    body: ExtractRequest,
    settings: Settings = Depends(get_settings),
) -> ExtractionResult:
    """Extract files, preambles and postamble from a markdown response."""
    check_input_size(body.text, settings)

    with stage_span("extract", input_chars=len(body.text)):
        result = extract_code_blocks(body.text)

    logger.info(
        "Extracted code blocks",
        extra={
            "file_count": len(result.files),
            "completed_count": len(result.completed_files()),
        },
    )
    return result


@router.post(
    "/v1/code/artifacts",
    response_model=ArtifactsResponse,
    summary="Build artifacts from a complete response",
)
async def build_artifacts(
    body: ArtifactsRequest,
    settings: Settings = Depends(get_settings),
) -> ArtifactsResponse:
    """
    Turn a complete coder response into named artifacts and a final message.

    Named blocks are emitted even when their closing fence is missing, matching
    the final pass a streaming adapter makes once the model has finished.
    """
    check_input_size(body.text, settings)

    task_id = body.task_id or str(uuid.uuid4())
    tracker = ArtifactTracker(task_id)

    with LogContext(task_id=task_id), stage_span("artifacts", input_chars=len(body.text)):
        updates = tracker.finalize(body.text)
        message = tracker.final_message(body.text, builder=build_final_message)

    logger.info(
        "Built artifacts",
        extra={"task_id": task_id, "artifact_count": len(updates)},
    )

    return ArtifactsResponse(
        task_id=task_id,
        artifacts=updates,
        parsed=tracker.final_artifacts or ParsedArtifacts(),
        message=message,
    )
