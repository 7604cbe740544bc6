"""Data models for code extraction and artifacts."""

from coder_artifacts.models.code import (
    ArtifactUpdate,
    ExtractedFile,
    ExtractionResult,
    ParsedArtifact,
    ParsedArtifacts,
)

__all__ = [
    "ArtifactUpdate",
    "ExtractedFile",
    "ExtractionResult",
    "ParsedArtifact",
    "ParsedArtifacts",
]
