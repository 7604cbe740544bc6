"""Incremental artifact emission for streamed responses."""

import logging
from collections.abc import Callable, Sequence

from coder_artifacts.artifacts.parser import (
    build_default_final_message,
    parse_code_artifacts,
)
from coder_artifacts.models.code import ArtifactUpdate, ParsedArtifact, ParsedArtifacts
from coder_artifacts.observability.tracing import traced

logger = logging.getLogger(__name__)

ArtifactParser = Callable[[str], ParsedArtifacts]
FinalMessageBuilder = Callable[
    [Sequence[ParsedArtifact], str, str | None, str | None], str
]


class ArtifactTracker:
    """
    Tracks which artifacts of a streamed response have been emitted.

    The response is re-parsed in full after every chunk. An artifact is
    emitted the first time it is seen complete and again whenever its
    content changes, so consumers receive each file once per distinct
    version. One tracker belongs to one task.
    """

    def __init__(self, task_id: str, parse: ArtifactParser = parse_code_artifacts) -> None:
        """
        Initialize the tracker.

        Args:
            task_id: Task the artifacts belong to; prefixes artifact ids.
            parse: Function turning accumulated text into ParsedArtifacts.
        """
        self.task_id = task_id
        self._parse = parse
        self._contents: dict[str, str] = {}
        self._order: list[str] = []
        self._emitted_count = 0
        self._final: ParsedArtifacts | None = None

    @property
    def order(self) -> list[str]:
        """Filenames in the order they were first emitted."""
        return list(self._order)

    @property
    def emitted_count(self) -> int:
        """Number of updates emitted, re-emissions included."""
        return self._emitted_count

    @property
    def final_artifacts(self) -> ParsedArtifacts | None:
        """Result of the last finalize() call."""
        return self._final

    def update(self, accumulated_text: str) -> list[ArtifactUpdate]:
        """
        Emit completed artifacts whose content changed.

        Args:
            accumulated_text: Full response text received so far.

        Returns:
            Updates for closed, named artifacts with new content.
        """
        parsed = self._parse(accumulated_text)
        updates: list[ArtifactUpdate] = []
        for artifact in parsed.artifacts:
            if artifact.done and artifact.filename:
                update = self._emit(artifact.filename, artifact, final=False)
                if update is not None:
                    updates.append(update)
        return updates

    @traced(name="coder_artifacts.finalize")
    def finalize(self, accumulated_text: str) -> list[ArtifactUpdate]:
        """
        Final pass over the complete response.

        Unlike update(), named artifacts are emitted even if their block was
        never closed.

        Args:
            accumulated_text: The complete response text.

        Returns:
            Updates for named artifacts whose content changed.
        """
        parsed = self._parse(accumulated_text)
        self._final = parsed
        updates: list[ArtifactUpdate] = []
        for artifact in parsed.artifacts:
            if artifact.filename:
                update = self._emit(artifact.filename, artifact, final=True)
                if update is not None:
                    updates.append(update)
        return updates

    def final_message(
        self,
        full_response: str,
        builder: FinalMessageBuilder | None = None,
    ) -> str:
        """
        Build the final message for the task.

        Args:
            full_response: The complete response text.
            builder: Optional custom builder; defaults to a summary of the
                emitted artifacts.

        Returns:
            Final message text.
        """
        parsed = self._final or ParsedArtifacts()

        if builder is not None:
            return builder(parsed.artifacts, full_response, parsed.preamble, parsed.postamble)

        return build_default_final_message(
            full_response,
            self._order,
            self._emitted_count,
            parsed.preamble,
            parsed.postamble,
        )

    def _emit(
        self, filename: str, artifact: ParsedArtifact, *, final: bool
    ) -> ArtifactUpdate | None:
        content = artifact.content.strip()

        if self._contents.get(filename) == content:
            return None

        self._contents[filename] = content
        if filename not in self._order:
            self._order.append(filename)
        self._emitted_count += 1

        logger.debug(
            "Emitted artifact",
            extra={
                "task_id": self.task_id,
                "artifact_name": filename,
                "size": len(content),
                "final": final,
            },
        )

        return ArtifactUpdate(
            artifact_id=f"{self.task_id}-{filename}",
            name=filename,
            text=content,
            language=artifact.language,
            final=final,
        )
