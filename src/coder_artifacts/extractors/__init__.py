"""Extraction of code blocks from model responses."""

from coder_artifacts.extractors.code_blocks import (
    FENCE_MARKER,
    extract_code_blocks,
    parse_fence_info,
)

__all__ = ["FENCE_MARKER", "extract_code_blocks", "parse_fence_info"]
