"""Markdown code fence extraction.

Parses responses written in the coder output format::

    Some prose.

    ```ts src/file.ts
    // code
    ```

    Closing remarks.

into an ordered list of files plus the prose that follows the last closed
block. The parser is total: unclosed fences, missing info tokens and stray
text never raise, they only change what ends up in the result.
"""

from coder_artifacts.models.code import ExtractedFile, ExtractionResult

FENCE_MARKER = "```"


def parse_fence_info(fence_line: str) -> tuple[str | None, str | None]:
    """
    Split an opening fence line into (language, filename).

    Only the first two whitespace-separated tokens are used; anything
    after them is ignored.

    Args:
        fence_line: The trimmed fence line, marker included.

    Returns:
        Tuple of language and filename, either of which may be None.
    """
    parts = fence_line[len(FENCE_MARKER):].split()
    language = parts[0] if len(parts) > 0 else None
    filename = parts[1] if len(parts) > 1 else None
    return language, filename


def extract_code_blocks(source: str) -> ExtractionResult:
    """
    Extract fenced code blocks from markdown text.

    Streaming callers should re-run this on the full accumulated buffer;
    no state is kept between calls.

    Args:
        source: Markdown text, lines separated by "\\n".

    Returns:
        ExtractionResult with files in order of appearance.
    """
    files: list[ExtractedFile] = []
    current_preamble = ""
    postamble = ""
    in_code_block = False

    lines = source.split("\n")
    if source.endswith("\n"):
        # A final newline terminates the last line, it does not start a new one
        lines.pop()

    for line in lines:
        trimmed = line.strip()

        if trimmed.startswith(FENCE_MARKER):
            if not in_code_block:
                language, filename = parse_fence_info(trimmed)
                files.append(ExtractedFile(
                    preamble=current_preamble.strip(),
                    filename=filename,
                    language=language,
                ))
                current_preamble = ""
                in_code_block = True
            else:
                files[-1].done = True
                in_code_block = False
            continue

        if in_code_block:
            files[-1].content += f"{line}\n"
        elif files and files[-1].done:
            postamble += f"{line}\n"
        else:
            # Dropped unless a fence follows
            current_preamble += f"{line}\n"

    return ExtractionResult(files=files, postamble=postamble.strip())
