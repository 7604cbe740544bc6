"""Tests for markdown code block extraction."""

import pytest

from coder_artifacts.extractors.code_blocks import extract_code_blocks, parse_fence_info


class TestExtractCodeBlocks:
    """Tests for extract_code_blocks on well-formed responses."""

    def test_single_block_with_language_and_filename(self) -> None:
        """Test extraction of one block with preamble and postamble."""
        source = (
            "\nHere's a simple function:\n\n"
            "```typescript example.ts\n"
            "function hello() {\n"
            '  console.log("Hello World");\n'
            "}\n"
            "```\n\nDone!\n"
        )

        result = extract_code_blocks(source)

        assert len(result.files) == 1
        file = result.files[0]
        assert file.language == "typescript"
        assert file.filename == "example.ts"
        assert file.content == 'function hello() {\n  console.log("Hello World");\n}\n'
        assert file.done is True
        assert file.preamble == "Here's a simple function:"
        assert result.postamble == "Done!"

    def test_multiple_blocks_keep_order(self) -> None:
        """Test that blocks are returned in order of appearance."""
        source = "```js a.js\nx\n```\n\n```js b.js\ny\n```"

        result = extract_code_blocks(source)

        assert [f.filename for f in result.files] == ["a.js", "b.js"]
        assert result.files[0].content == "x\n"
        assert result.files[1].content == "y\n"
        assert result.files[1].preamble == ""
        assert all(f.done for f in result.files)

    def test_block_without_info_string(self) -> None:
        """Test a bare fence has neither language nor filename."""
        result = extract_code_blocks("```\nconst x = 42;\n```")

        file = result.files[0]
        assert file.content == "const x = 42;\n"
        assert file.language is None
        assert file.filename is None
        assert file.done is True

    def test_language_only(self) -> None:
        """Test a fence with a language but no filename."""
        result = extract_code_blocks('\n```python\nprint("Hello")\n```\n')

        assert result.files[0].language == "python"
        assert result.files[0].filename is None

    def test_filename_with_path(self) -> None:
        """Test filenames keep their directory components."""
        result = extract_code_blocks(
            "```typescript src/components/Button.tsx\n"
            "export const Button = () => <button>Click</button>;\n"
            "```\n"
        )

        assert result.files[0].filename == "src/components/Button.tsx"
        assert result.files[0].language == "typescript"

    def test_extra_info_tokens_ignored(self) -> None:
        """Test only the first two info tokens are used."""
        result = extract_code_blocks("```ts a.ts {highlight: [1]}\nx\n```")

        assert result.files[0].language == "ts"
        assert result.files[0].filename == "a.ts"

    def test_preamble_captured(self) -> None:
        """Test multi-line prose before the first block becomes its preamble."""
        source = (
            "\nHere's some explanation text.\n"
            "This describes what the code does.\n\n"
            "```ts file.ts\nconst code = true;\n```\n"
        )

        result = extract_code_blocks(source)

        assert result.files[0].preamble == (
            "Here's some explanation text.\nThis describes what the code does."
        )
        assert result.preamble == result.files[0].preamble

    def test_postamble_captured(self) -> None:
        """Test prose after the last closed block becomes the postamble."""
        result = extract_code_blocks("```ts a.ts\nx\n```\nDone!")

        assert result.postamble == "Done!"

    def test_text_between_blocks_goes_to_postamble(self) -> None:
        """Test prose after a closed block is collected as postamble, not preamble."""
        source = (
            "\nFirst, we need utilities:\n\n"
            "```ts utils.ts\nexport const util = () => {};\n```\n\n"
            "Then, the main file:\n\n"
            "```ts main.ts\nimport { util } from './utils';\nutil();\n```\n"
        )

        result = extract_code_blocks(source)

        assert len(result.files) == 2
        assert result.files[0].preamble == "First, we need utilities:"
        assert result.files[1].preamble == ""
        assert result.postamble == "Then, the main file:"
        assert result.files[0].done is True
        assert result.files[1].done is True

    def test_real_world_response(self, sample_response: str) -> None:
        """Test a full coder agent response."""
        result = extract_code_blocks(sample_response)

        assert [f.filename for f in result.files] == ["fibonacci.ts", "fibonacci.test.ts"]
        assert "Fibonacci number" in result.files[0].content
        assert result.files[0].preamble == "I'll create a Fibonacci function for you:"
        assert result.postamble.startswith("This implementation uses simple recursion.")
        assert result.postamble.endswith("consider using memoization.")


class TestContentPreservation:
    """Tests that block content is kept verbatim."""

    def test_indentation_preserved(self) -> None:
        """Test internal indentation survives extraction."""
        source = (
            "```python indent.py\n"
            "def example():\n"
            "    if True:\n"
            '        print("indented")\n'
            "```\n"
        )

        result = extract_code_blocks(source)

        assert result.files[0].content == (
            'def example():\n    if True:\n        print("indented")\n'
        )

    def test_inline_backticks_in_content(self) -> None:
        """Test inline code spans inside a block do not end it."""
        source = (
            "```typescript example.ts\n"
            "  // This is a comment with backticks: `inline code`\n"
            "```\n"
        )

        result = extract_code_blocks(source)

        assert result.files[0].content == "  // This is a comment with backticks: `inline code`\n"
        assert result.files[0].done is True

    def test_blank_lines_inside_block(self) -> None:
        """Test blank lines are kept as content."""
        result = extract_code_blocks("```py a.py\na = 1\n\nb = 2\n```")

        assert result.files[0].content == "a = 1\n\nb = 2\n"

    def test_indented_fences_recognized(self) -> None:
        """Test fences nested in list indentation still open and close blocks."""
        source = "1. Create the file:\n\n   ```py app.py\n   print('hi')\n   ```\n"

        result = extract_code_blocks(source)

        assert result.files[0].language == "py"
        assert result.files[0].filename == "app.py"
        assert result.files[0].content == "   print('hi')\n"
        assert result.files[0].done is True
        assert result.files[0].preamble == "1. Create the file:"

    def test_carriage_returns_kept_in_content(self) -> None:
        """Test CRLF input still detects fences; content keeps the CR."""
        result = extract_code_blocks("```ts a.ts\r\nx\r\n```\r\n")

        assert result.files[0].filename == "a.ts"
        assert result.files[0].content == "x\r\n"
        assert result.files[0].done is True


class TestEdgeCases:
    """Tests for degenerate and malformed input."""

    def test_empty_source(self) -> None:
        """Test empty input yields an empty result."""
        result = extract_code_blocks("")

        assert result.files == []
        assert result.postamble == ""
        assert result.preamble is None

    def test_plain_text_discarded(self) -> None:
        """Test prose without any fence is not surfaced anywhere."""
        result = extract_code_blocks("Just some plain text with no code blocks.")

        assert result.files == []
        assert result.postamble == ""

    def test_empty_block(self) -> None:
        """Test a block with no lines is kept with empty content."""
        result = extract_code_blocks("\n```ts empty.ts\n```\n")

        assert len(result.files) == 1
        assert result.files[0].content == ""
        assert result.files[0].done is True

    def test_unclosed_block(self) -> None:
        """Test a block cut off at end of input is marked not done."""
        result = extract_code_blocks("```ts unclosed.ts\nfunction test() {}\n")

        assert len(result.files) == 1
        assert result.files[0].done is False
        assert result.files[0].content == "function test() {}\n"
        assert result.postamble == ""

    def test_unclosed_block_content_grows_by_appending(self) -> None:
        """Test content of an open block only grows as more lines arrive."""
        first = extract_code_blocks("```ts a.ts\nconst a = 1;\n")
        second = extract_code_blocks("```ts a.ts\nconst a = 1;\nconst b = 2;\n")

        assert first.files[0].content == "const a = 1;\n"
        assert second.files[0].content.startswith(first.files[0].content)

    def test_trailing_blank_line_inside_open_block_is_kept(self) -> None:
        """Test only the final line terminator is dropped, not blank lines."""
        result = extract_code_blocks("```ts a.ts\nx\n\n")

        assert result.files[0].content == "x\n\n"

    def test_unclosed_block_after_closed_block(self) -> None:
        """Test prose between a closed and an unclosed block stays in postamble."""
        source = "```ts a.ts\nx\n```\nNext:\n```ts b.ts\ny"

        result = extract_code_blocks(source)

        assert [f.done for f in result.files] == [True, False]
        assert result.files[1].content == "y\n"
        assert result.postamble == "Next:"

    def test_trailing_prose_after_unclosed_block_is_content(self) -> None:
        """Test text after an unclosed fence is treated as block content."""
        result = extract_code_blocks("```md notes.md\n# Title\nSome notes")

        assert result.files[0].content == "# Title\nSome notes\n"
        assert result.postamble == ""

    def test_closing_fence_with_info_string(self) -> None:
        """Test any fence line closes an open block, even with trailing text."""
        result = extract_code_blocks("```py a.py\nx = 1\n```js b.js\n")

        assert len(result.files) == 1
        assert result.files[0].done is True
        assert result.files[0].content == "x = 1\n"

    def test_stray_inline_backticks_outside_blocks(self) -> None:
        """Test inline code in prose does not open a block."""
        result = extract_code_blocks("Use `npm install` first.\n```sh run.sh\nnpm start\n```")

        assert len(result.files) == 1
        assert result.files[0].preamble == "Use `npm install` first."

    def test_open_block_at_end_leaves_postamble_empty(self) -> None:
        """Test a response ending inside a block has no postamble."""
        result = extract_code_blocks("Intro\n```ts a.ts\nx")

        assert result.files[0].preamble == "Intro"
        assert result.postamble == ""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("", 0),
            ("no fences here", 0),
            ("```\n```", 1),
            ("```a\n```\n```b\n```\n```c", 3),
            ("```ts a.ts\n```\ntext\n```ts b.ts\nstill open", 2),
        ],
    )
    def test_one_file_per_opening_fence(self, source: str, expected: int) -> None:
        """Test the file count equals the number of opening fences."""
        assert len(extract_code_blocks(source).files) == expected


class TestReparse:
    """Tests for re-extracting reconstructed responses."""

    def test_reconstructed_text_yields_same_files(self, sample_response: str) -> None:
        """Test rebuilding blocks from extracted files and re-parsing is stable."""
        first = extract_code_blocks(sample_response)

        rebuilt = "\n\n".join(
            f"```{f.language or ''} {f.filename or ''}\n{f.content}```"
            for f in first.files
        )
        second = extract_code_blocks(rebuilt)

        assert [(f.language, f.filename, f.content) for f in second.files] == [
            (f.language, f.filename, f.content) for f in first.files
        ]


class TestParseFenceInfo:
    """Tests for fence info string parsing."""

    def test_language_and_filename(self) -> None:
        assert parse_fence_info("```ts src/a.ts") == ("ts", "src/a.ts")

    def test_extra_whitespace(self) -> None:
        assert parse_fence_info("```   ts\t  a.ts  ") == ("ts", "a.ts")

    def test_empty(self) -> None:
        assert parse_fence_info("```") == (None, None)
