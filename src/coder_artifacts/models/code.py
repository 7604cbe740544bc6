"""Code extraction and artifact models."""

from typing import Any

from pydantic import BaseModel, Field


class ExtractedFile(BaseModel):
    """A single fenced code block found in the source text."""

    preamble: str = Field(
        default="",
        description="Trimmed prose immediately preceding the opening fence",
    )
    filename: str | None = Field(
        default=None,
        description="Second token of the fence info string",
    )
    language: str | None = Field(
        default=None,
        description="First token of the fence info string",
    )
    content: str = Field(
        default="",
        description="Lines between the fences, each terminated by a newline",
    )
    done: bool = Field(
        default=False,
        description="True once the closing fence has been seen",
    )

    model_config = {"json_schema_extra": {"examples": [
        {
            "preamble": "Here's a simple function:",
            "filename": "example.ts",
            "language": "typescript",
            "content": "function hello() {}\n",
            "done": True,
        }
    ]}}


class ExtractionResult(BaseModel):
    """Structured view of a markdown response containing code blocks."""

    files: list[ExtractedFile] = Field(default_factory=list)
    postamble: str = Field(
        default="",
        description="Trimmed prose following the last closed block",
    )

    @property
    def preamble(self) -> str | None:
        """Preamble of the first file, if any file was found."""
        if not self.files:
            return None
        return self.files[0].preamble

    def completed_files(self) -> list[ExtractedFile]:
        """Files that are closed and carry a filename."""
        return [f for f in self.files if f.done and f.filename]


class ParsedArtifact(BaseModel):
    """An extracted file in the shape consumed by artifact emitters."""

    filename: str | None = None
    language: str | None = None
    content: str
    done: bool
    preamble: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class ParsedArtifacts(BaseModel):
    """All artifacts parsed from an accumulated response so far."""

    artifacts: list[ParsedArtifact] = Field(default_factory=list)
    preamble: str | None = None
    postamble: str | None = None


class ArtifactUpdate(BaseModel):
    """A named artifact emitted because its content changed."""

    artifact_id: str = Field(description="Stable id: '<task_id>-<filename>'")
    name: str = Field(description="Artifact filename")
    text: str = Field(description="Stripped artifact content")
    language: str | None = None
    final: bool = Field(
        default=False,
        description="True when emitted by the final pass over the response",
    )
