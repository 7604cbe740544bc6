"""Artifact parsing and streaming emission for the coder agent."""

from coder_artifacts.artifacts.parser import (
    build_default_final_message,
    build_final_message,
    parse_code_artifacts,
)
from coder_artifacts.artifacts.tracker import ArtifactTracker

__all__ = [
    "ArtifactTracker",
    "build_default_final_message",
    "build_final_message",
    "parse_code_artifacts",
]
