"""Markdown documentation generator for a project's example programs.

Scans the ``examples`` directory, pulls a title, a description and usage
snippets out of each example's comments and code, and writes one markdown
page per example plus an index page.
"""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Union

PathLike = Union[str, "os.PathLike[str]"]

_EXAMPLE_SUFFIX = ".rs"
_CODE_LANGUAGE = "rust"
_MANIFEST = "Cargo.toml"
_OUTPUT_DIR = Path("target/markdown-docs")
_EXAMPLES_DIR = Path("examples")

_TITLE_SCAN_LINES = 20
_BLOCK_SCAN_LINES = 10
_DESCRIPTION_SCAN_LINES = 30


def _lines(text: str) -> List[str]:
    """Split text into lines on ``\\n``, dropping one trailing ``\\r`` and a final empty line."""
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def _leading_whitespace(text: str) -> int:
    return len(text) - len(text.lstrip())


def _dedent(lines: Sequence[str], indent: int) -> Iterator[str]:
    for line in lines:
        yield line[indent:] if len(line) > indent else line


def _fenced(body: str) -> str:
    return f"```{_CODE_LANGUAGE}\n{body}```\n"


def _title_from_name(name: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in name.split("_"))


def extract_example_title(content: str, default_name: str) -> str:
    """Title from the first doc comment of the example, or one made from its name."""
    lines = _lines(content)
    for raw in lines[:_TITLE_SCAN_LINES]:
        line = raw.strip()
        if line.startswith("//!"):
            comment = line[3:].strip()
            if comment:
                return comment
        elif line.startswith("/*"):
            start = next(
                (i for i, candidate in enumerate(lines) if candidate.strip().startswith("/*")),
                len(lines),
            )
            for block_line in lines[start : start + _BLOCK_SCAN_LINES]:
                trimmed = block_line.strip()
                if trimmed.startswith("*") and not trimmed.startswith("*/"):
                    comment = trimmed[1:].strip()
                    if comment:
                        return comment
    return _title_from_name(default_name)


def extract_example_description(content: str) -> str:
    """Doc-comment lines after the title line, joined by newlines."""
    collected: List[str] = []
    in_comment_block = False
    found_title = False

    for raw in _lines(content)[:_DESCRIPTION_SCAN_LINES]:
        line = raw.strip()
        comment: Optional[str] = None
        if line.startswith("//!"):
            comment = line[3:].strip()
        elif line.startswith("/**"):
            in_comment_block = True
            found_title = False
        elif line.startswith("*/"):
            in_comment_block = False
        elif in_comment_block and line.startswith("*"):
            comment = line[1:].strip()

        if comment:
            if not found_title:
                found_title = True
                continue
            collected.append(comment + "\n")

    return "".join(collected).strip()


def _normalize_usage(buffer: str, indent: Optional[int]) -> str:
    if indent is None:
        return buffer
    return "\n".join(_dedent(_lines(buffer), indent))


def _marked_usage(source: str) -> str:
    usage_info: List[str] = []
    in_usage_section = False
    buffer: List[str] = []
    common_indent: Optional[int] = None

    for line in _lines(source):
        trimmed = line.strip()
        if trimmed.startswith("// USAGE:") or trimmed.startswith("//! USAGE:"):
            in_usage_section = True
            common_indent = None
            continue

        if in_usage_section and trimmed.startswith("//"):
            comment_start = 3 if trimmed.startswith("//!") else 2
            comment = line[line.find("//") + comment_start :] if len(line) > comment_start else ""

            if comment.strip():
                leading = _leading_whitespace(comment)
                common_indent = leading if common_indent is None else min(common_indent, leading)

            buffer.append(comment + "\n")

            if not comment.strip():
                in_usage_section = False
                usage_info.append(_fenced(_normalize_usage("".join(buffer), common_indent)))
                buffer.clear()

    if in_usage_section and buffer:
        usage_info.append(_fenced(_normalize_usage("".join(buffer), common_indent)))

    return "".join(usage_info)


def _main_function_usage(source: str) -> str:
    found_fn_main = False
    in_main = False
    brackets = 0
    code_lines: List[str] = []
    common_indent: Optional[int] = None

    for line in _lines(source):
        if "fn main" in line:
            found_fn_main = True
            in_main = True
            if "{" in line:
                brackets += 1
            continue

        if not in_main:
            continue

        if "{" in line:
            brackets += line.count("{")
        if "}" in line:
            brackets -= line.count("}")
            if brackets == 0:
                in_main = False

        trimmed = line.strip()
        if (
            not trimmed.startswith("//")
            and "(" in trimmed
            and "println!" not in trimmed
            and "assert" not in trimmed
        ):
            code_lines.append(line)
            leading = _leading_whitespace(line)
            if leading > 0:
                common_indent = leading if common_indent is None else min(common_indent, leading)

    if not (found_fn_main and code_lines):
        return ""

    selected = code_lines if common_indent is None else list(_dedent(code_lines, common_indent))
    return _fenced("".join(line + "\n" for line in selected))


def extract_example_usage(source: str) -> str:
    """Usage snippets as fenced markdown.

    Comment blocks introduced by a ``USAGE:`` marker are used when present;
    otherwise the calls made in the example's main function are listed.
    """
    usage_info = _marked_usage(source)
    if not usage_info:
        usage_info = _main_function_usage(source)
    return usage_info.strip()


def _example_name(path: Path) -> str:
    return path.name.replace(_EXAMPLE_SUFFIX, "")


def generate_markdown_content(path: PathLike, content: str, package_name: str) -> str:
    """Markdown page for one example file with the given source text."""
    example_name = _example_name(Path(path))
    title = extract_example_title(content, example_name)
    description = extract_example_description(content)

    parts = [f"# {title}\n\n", "[Back to Examples Index](./README.md)\n\n"]
    if description:
        parts.append(f"{description}\n\n")

    usage_info = extract_example_usage(content)
    if usage_info:
        parts.append("## Usage\n\n")
        parts.append(f"{usage_info}\n\n")

    parts.append("## Complete Source Code\n\n")
    parts.append(f"```{_CODE_LANGUAGE}\n")
    parts.append(content)
    parts.append("```\n")
    parts.append("\n---\n\n")
    parts.append(f"Generated for {package_name} library")
    return "".join(parts)


def _is_example(path: Path) -> bool:
    return path.is_file() and path.suffix == _EXAMPLE_SUFFIX


def generate_examples_markdown(
    output_dir: PathLike, examples_dir: PathLike, package_name: str, promote: bool
) -> List[Path]:
    """Write an index page and one page per example; return the example pages written.

    With ``promote`` each page is also written beside its example file and the
    index is copied into the examples directory.
    """
    output_dir = Path(output_dir)
    examples_dir = Path(examples_dir)
    index_path = output_dir / "README.md"

    entries = sorted(examples_dir.iterdir(), key=lambda entry: entry.name)
    examples = [entry for entry in entries if _is_example(entry)]
    sources = {entry: entry.read_text(encoding="utf-8") for entry in examples}

    index = [
        f"# {package_name} Examples\n",
        f"\nThis page contains examples demonstrating various features of the "
        f"{package_name} library.\n\n",
        "## Available Examples\n\n",
    ]
    for entry in examples:
        name = _example_name(entry)
        title = extract_example_title(sources[entry], name)
        index.append(f"- [{title}](./{name}.md)\n")
    index_path.write_text("".join(index), encoding="utf-8", newline="\n")

    pages_dir = output_dir / "examples"
    pages_dir.mkdir(parents=True, exist_ok=True)

    written: List[Path] = []
    for entry in examples:
        md_content = generate_markdown_content(entry, sources[entry], package_name)
        page = pages_dir / f"{_example_name(entry)}.md"
        page.write_text(md_content, encoding="utf-8", newline="\n")
        written.append(page)
        if promote:
            entry.with_suffix(".md").write_text(md_content, encoding="utf-8", newline="\n")

    if promote:
        shutil.copyfile(index_path, examples_dir / "README.md")
    return written


def extract_toml_value(content: str, key: str) -> str:
    """Value of the first line starting with ``key`` and holding ``=``, unquoted; "" if none."""
    for raw in _lines(content):
        line = raw.strip()
        if line.startswith(key) and "=" in line:
            return line.split("=")[1].strip().strip('"')
    return ""


def extract_package_name(cargo_toml: str) -> str:
    """Package name from the text of a project manifest."""
    return extract_toml_value(cargo_toml, "name")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Generate the example documentation; return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    promote = "--promote" in args

    try:
        _OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        package_name = extract_package_name(Path(_MANIFEST).read_text(encoding="utf-8"))

        print("Generating markdown documentation for examples...")
        if _EXAMPLES_DIR.exists():
            generate_examples_markdown(_OUTPUT_DIR, _EXAMPLES_DIR, package_name, promote)
        else:
            print("No examples directory found.")
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Markdown documentation generated at: {_OUTPUT_DIR}")
    if promote:
        print("Markdown files also placed next to example files in the examples directory.")
    return 0


if __name__ == "__main__":
    sys.exit(main())