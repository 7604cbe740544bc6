"""Mapping of extracted code blocks to artifacts and final messages."""

from collections.abc import Sequence

from coder_artifacts.extractors.code_blocks import extract_code_blocks
from coder_artifacts.models.code import ParsedArtifact, ParsedArtifacts


def parse_code_artifacts(accumulated_text: str) -> ParsedArtifacts:
    """
    Parse artifacts from the response text accumulated so far.

    Called after each streamed chunk; returns every block found, complete
    or not. Deduplication is the caller's job (see ArtifactTracker).

    Args:
        accumulated_text: Full response text received so far.

    Returns:
        ParsedArtifacts with one artifact per fenced block.
    """
    parsed = extract_code_blocks(accumulated_text)

    return ParsedArtifacts(
        artifacts=[
            ParsedArtifact(
                filename=file.filename,
                language=file.language,
                content=file.content,
                done=file.done,
                metadata={"preamble": file.preamble},
            )
            for file in parsed.files
        ],
        preamble=parsed.preamble,
        postamble=parsed.postamble,
    )


def _generated_summary(filenames: Sequence[str], count: int) -> str:
    suffix = "s" if count > 1 else ""
    return f"Generated {count} file{suffix}: {', '.join(filenames)}"


def _wrap(body: str, preamble: str | None, postamble: str | None) -> str:
    message = f"{preamble}\n\n" if preamble else ""
    message += body
    if postamble:
        message += f"\n\n{postamble}"
    return message


def build_final_message(
    artifacts: Sequence[ParsedArtifact],
    full_response: str,
    preamble: str | None = None,
    postamble: str | None = None,
) -> str:
    """
    Build the coder agent's final message.

    Lists the named artifacts that were generated, framed by the response's
    preamble and postamble. Falls back to the full response when no
    artifact has a filename.

    Args:
        artifacts: Artifacts parsed from the complete response.
        full_response: The complete response text.
        preamble: Prose before the first code block.
        postamble: Prose after the last closed code block.

    Returns:
        The final message text.
    """
    named = [a.filename for a in artifacts if a.filename]

    if named:
        body = _generated_summary(named, len(named))
    else:
        body = full_response

    return _wrap(body, preamble, postamble)


def build_default_final_message(
    full_response: str,
    artifact_order: Sequence[str],
    emitted_count: int,
    preamble: str | None = None,
    postamble: str | None = None,
) -> str:
    """Generic final message driven by what a tracker actually emitted."""
    if emitted_count > 0:
        body = _generated_summary(artifact_order, emitted_count)
    else:
        body = full_response

    return _wrap(body, preamble, postamble)
