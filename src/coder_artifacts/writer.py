"""Write extracted code files to disk."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from coder_artifacts.exceptions import FileConflictError, UnsafeFilenameError
from coder_artifacts.models.code import ExtractionResult
from coder_artifacts.observability.tracing import traced

logger = logging.getLogger(__name__)


@dataclass
class SkippedFile:
    """A code block that was not written."""

    index: int
    filename: str | None
    reason: str  # "unnamed" or "incomplete"


@dataclass
class WriteReport:
    """Outcome of writing an extraction result."""

    written: list[Path] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)
    dry_run: bool = False


class FileWriter:
    """
    Materializes named, completed code blocks as files.

    Blocks without a filename or without a closing fence are skipped.
    When several blocks share a filename, the last one wins.
    """

    def __init__(
        self,
        output_dir: str | Path,
        overwrite: bool = False,
        dry_run: bool = False,
    ) -> None:
        """
        Initialize the writer.

        Args:
            output_dir: Directory that all filenames are resolved against.
            overwrite: Replace files that already exist.
            dry_run: Report what would be written without touching disk.
        """
        self.output_dir = Path(output_dir)
        self.overwrite = overwrite
        self.dry_run = dry_run

    def resolve(self, filename: str) -> Path:
        """
        Resolve a block filename to a path inside the output directory.

        Raises:
            UnsafeFilenameError: If the filename is absolute or escapes
                the output directory.
        """
        candidate = Path(filename)
        if candidate.is_absolute() or candidate.drive:
            raise UnsafeFilenameError(filename, detail="Absolute paths are not allowed")

        root = self.output_dir.resolve()
        target = (root / candidate).resolve()
        if target == root or not target.is_relative_to(root):
            raise UnsafeFilenameError(
                filename, detail=f"Path escapes output directory {self.output_dir}"
            )
        return target

    def _check_targets(self, targets: dict[Path, str]) -> None:
        """
        Refuse targets that cannot all be written as plain files.

        Raises:
            FileConflictError: If a target exists and overwrite is off, is an
                existing directory, sits below an existing non-directory, or
                is the parent directory of another target.
        """
        root = self.output_dir.resolve()
        for target in targets:
            for other in targets:
                if other in target.parents:
                    raise FileConflictError(
                        str(other),
                        detail=f"{other} is both a file and the directory of {target}",
                    )

            if target.is_dir():
                raise FileConflictError(str(target), detail=f"{target} is a directory")
            if not self.overwrite and target.exists():
                raise FileConflictError(str(target))

            for parent in target.parents:
                if parent == root or not parent.is_relative_to(root):
                    break
                if parent.exists() and not parent.is_dir():
                    raise FileConflictError(
                        str(parent),
                        detail=f"{parent} is a file, cannot create {target}",
                    )

    @traced(name="coder_artifacts.write")
    def write(self, result: ExtractionResult) -> WriteReport:
        """
        Write the completed files of an extraction result.

        All targets are validated before anything is written, so a bad
        filename or a conflict leaves the output directory untouched.

        Args:
            result: Extraction result to materialize.

        Returns:
            WriteReport listing written paths and skipped blocks.

        Raises:
            UnsafeFilenameError: If any filename is unsafe.
            FileConflictError: If a target exists and overwrite is off, or
                two targets clash as file and directory.
        """
        report = WriteReport(dry_run=self.dry_run)
        targets: dict[Path, str] = {}

        for index, file in enumerate(result.files):
            if not file.filename:
                report.skipped.append(SkippedFile(index, None, "unnamed"))
                continue
            if not file.done:
                report.skipped.append(SkippedFile(index, file.filename, "incomplete"))
                continue

            target = self.resolve(file.filename)
            # Re-inserting keeps first-seen order with the last content
            targets[target] = file.content

        self._check_targets(targets)

        for target, content in targets.items():
            if not self.dry_run:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content, encoding="utf-8")
            report.written.append(target)
            logger.info(
                "Wrote file" if not self.dry_run else "Would write file",
                extra={"path": str(target), "size": len(content)},
            )

        for skipped in report.skipped:
            logger.debug(
                "Skipped code block",
                extra={"index": skipped.index, "block_filename": skipped.filename, "reason": skipped.reason},
            )

        return report
