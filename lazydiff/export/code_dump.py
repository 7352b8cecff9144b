"""Code dump export.

Copies every non-ignored file of the repository into a fresh directory. C/C++
headers and sources sharing a directory and stem are merged into a single
``<stem>_merged.cpp`` bundle. The ``tree`` layout keeps directories; the
``flat`` layout encodes them into file names with ``_``.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

HEADER_EXTENSIONS = frozenset({".h", ".hpp", ".hxx", ".hh"})
SOURCE_EXTENSIONS = frozenset({".cpp", ".cxx", ".cc", ".c"})
LAYOUT_TREE = "tree"
LAYOUT_FLAT = "flat"
SUMMARY_FILENAME = "dump_summary.txt"

_BANNER = "// " + "=" * 76 + "\n"
_RULE = "=" * 80


@dataclass
class _Pair:
    stem: str
    directory: str
    header: str | None = None
    source: str | None = None


def _output_name(directory: str, name: str, layout: str) -> str:
    if directory == ".":
        return name
    if layout == LAYOUT_FLAT:
        return directory.replace("/", "_").replace("\\", "_") + "_" + name
    return posixpath.join(directory, name)


def _read(root: Path, rel_path: str, label: str) -> str:
    try:
        return (root / rel_path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        return f"// Error reading {label}: {exc}\n"


def _layout_label(layout: str) -> str:
    return "Flattened" if layout == LAYOUT_FLAT else "Directory Tree"


def _format_time(now: datetime) -> str:
    return now.strftime("%Y-%m-%d %H:%M:%S")


def _merged_content(root: Path, pair: _Pair, layout: str, now: datetime) -> str:
    out = [
        _BANNER,
        f"// Merged file: {pair.stem}\n",
        f"// Original directory: {pair.directory}\n",
        f"// Merged at: {_format_time(now)}\n",
        f"// Layout: {_layout_label(layout)}\n",
    ]
    header_name = posixpath.basename(pair.header) if pair.header else "(no matching header)"
    source_name = posixpath.basename(pair.source) if pair.source else "(no matching source)"
    out.append(f"// Header: {header_name}\n")
    out.append(f"// Source: {source_name}\n")
    out.append(_BANNER + "\n")
    if pair.header and pair.source:
        out.append(f"// -------------------- Header File: {header_name} --------------------\n\n")
        out.append(_read(root, pair.header, "header"))
        out.append("\n\n")
        out.append(f"// -------------------- Source File: {source_name} --------------------\n\n")
        out.append(_read(root, pair.source, "source"))
    elif pair.header:
        out.append(_read(root, pair.header, "header"))
    elif pair.source:
        out.append(_read(root, pair.source, "source"))
    return "".join(out)


def build_code_dump(files: Iterable[str], root: Path, layout: str, now: datetime) -> dict[str, str]:
    """Return ``{output relative name: content}`` for repo-relative ``files``."""
    pairs: dict[tuple[str, str], _Pair] = {}
    sources: list[str] = []
    others: list[str] = []
    for rel_path in files:
        ext = posixpath.splitext(rel_path)[1].lower()
        if ext in HEADER_EXTENSIONS:
            directory = posixpath.dirname(rel_path) or "."
            stem = posixpath.splitext(posixpath.basename(rel_path))[0]
            pairs.setdefault((directory, stem), _Pair(stem=stem, directory=directory, header=rel_path))
        elif ext in SOURCE_EXTENSIONS:
            sources.append(rel_path)
        else:
            others.append(rel_path)

    unmatched: list[str] = []
    for rel_path in sources:
        directory = posixpath.dirname(rel_path) or "."
        stem = posixpath.splitext(posixpath.basename(rel_path))[0]
        pair = pairs.get((directory, stem))
        if pair is None:
            unmatched.append(rel_path)
        else:
            pair.source = rel_path

    outputs: dict[str, str] = {}
    for pair in pairs.values():
        name = _output_name(pair.directory, f"{pair.stem}_merged.cpp", layout)
        outputs[name] = _merged_content(root, pair, layout, now)

    for rel_path in unmatched:
        directory = posixpath.dirname(rel_path) or "."
        name = posixpath.basename(rel_path)
        outputs[_output_name(directory, name, layout)] = "".join(
            [
                _BANNER,
                f"// Standalone file: {name}\n",
                f"// Original directory: {directory}\n",
                f"// Exported at: {_format_time(now)}\n",
                _BANNER + "\n",
                _read(root, rel_path, "file"),
            ]
        )

    for rel_path in others:
        directory = posixpath.dirname(rel_path) or "."
        outputs[_output_name(directory, posixpath.basename(rel_path), layout)] = _read(root, rel_path, "file")

    return outputs


def dump_summary(outputs: dict[str, str], output_dir: Path, source_dir: Path, layout: str, now: datetime) -> str:
    lines = [
        _RULE,
        "Code Dump Summary",
        _RULE,
        "",
        f"Export Time: {_format_time(now)}",
        f"Source Directory: {source_dir}",
        f"Output Directory: {output_dir}",
        f"Output Mode: {_layout_label(layout)}",
        "",
        "Statistics:",
        f"  - Total Files: {len(outputs)}",
        "",
        _RULE,
        "File List",
        _RULE,
        "",
    ]
    lines.extend(f"  {name}" for name in sorted(outputs))
    lines.extend(["", _RULE])
    if layout == LAYOUT_FLAT:
        lines.append("Note: In flat mode, path information is encoded in filenames")
        lines.append("      Path separators '/' and '\\' are replaced with '_'")
    else:
        lines.append("Note: Directory structure is preserved")
    lines.append(_RULE)
    return "\n".join(lines) + "\n"


def write_code_dump(outputs: dict[str, str], output_dir: Path) -> int:
    """Write every output file below ``output_dir`` and return how many were written."""
    for name, content in outputs.items():
        target = output_dir / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return len(outputs)
