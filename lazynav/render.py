"""Frame composition for the dual-pane view.

Builds one full ANSI frame from controller state: the primary listing on the
left, the boxed preview on the right, and a status bar on the last row.
Functions here are presentation-only and never mutate pane state beyond
the scroll offset kept by ``NavigationPane.visible_range``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.util import ClassNotFound

from .ansi import clip_ansi_line, display_width, fit_ansi_line
from .controller import Focus, PaneController
from .listing import MARK_INDICATOR, Entry, EntryKind
from .metadata import format_metadata, shortened_path
from .pane import NavigationPane
from .preview import GlyphArt, NestedPane, Placeholder, PreviewContent, RawText

RESET = "\033[0m"
SELECTED_ACTIVE_STYLE = "\033[7m"
SELECTED_INACTIVE_STYLE = "\033[2;7m"
DIRECTORY_STYLE = "\033[1;38;5;75m"
SYMLINK_STYLE = "\033[38;5;141m"
ERROR_STYLE = "\033[38;5;203m"
MARK_STYLE = "\033[1;38;5;220m"
BORDER_ACTIVE_STYLE = "\033[38;5;45m"
BORDER_INACTIVE_STYLE = "\033[38;5;240m"
PLACEHOLDER_STYLE = "\033[2;38;5;250m"
STATUS_STYLE = "\033[7m"

MIN_PREVIEW_WIDTH = 6

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTER = TerminalFormatter()


@dataclass(frozen=True)
class Layout:
    columns: int
    rows: int
    left_width: int
    right_x: int
    right_width: int

    @property
    def body_rows(self) -> int:
        return max(1, self.rows - 1)

    @property
    def has_preview(self) -> bool:
        return self.right_width >= MIN_PREVIEW_WIDTH

    @property
    def preview_rows(self) -> int:
        return max(1, self.body_rows - 2)

    @property
    def preview_columns(self) -> int:
        return max(1, self.right_width - 2)


def compute_layout(columns: int, rows: int, left_percent: float) -> Layout:
    """Split the screen into listing and preview columns with a one-cell gap."""
    columns = max(1, columns)
    left_width = int(columns * left_percent / 100)
    left_width = max(1, min(left_width, columns))
    right_x = min(columns, left_width + 1)
    return Layout(
        columns=columns,
        rows=max(1, rows),
        left_width=left_width,
        right_x=right_x,
        right_width=max(0, columns - right_x),
    )


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", source)


def highlight_text(content: str, path: Path, max_lines: int) -> list[str]:
    """Syntax highlight the first ``max_lines`` lines of ``content``."""
    visible = sanitize_terminal_text("\n".join(content.splitlines()[:max_lines]))
    if not visible:
        return []
    try:
        lexer = get_lexer_for_filename(path.name, visible)
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(visible, lexer, _FORMATTER).splitlines()


def entry_style(entry: Entry) -> str:
    if entry.is_error:
        return ERROR_STYLE
    if entry.kind is EntryKind.DIRECTORY:
        return DIRECTORY_STYLE
    if entry.kind is EntryKind.SYMLINK:
        return SYMLINK_STYLE
    return ""


def format_entry_row(entry: Entry, width: int, selected: bool, active: bool) -> str:
    label = fit_ansi_line(sanitize_terminal_text(entry.display_label), width)
    if selected:
        style = SELECTED_ACTIVE_STYLE if active else SELECTED_INACTIVE_STYLE
        return f"{style}{entry_style(entry)}{label}{RESET}"
    if label.startswith(MARK_INDICATOR):
        return f"{MARK_STYLE}{MARK_INDICATOR}{RESET}{entry_style(entry)}{label[1:]}{RESET}"
    return f"{entry_style(entry)}{label}{RESET}"


def pane_lines(pane: NavigationPane, rows: int, width: int, active: bool) -> list[str]:
    """Visible rows of ``pane``, padded with blanks to exactly ``rows`` lines."""
    lines = [
        format_entry_row(pane.listing[idx], width, idx == pane.cursor, active)
        for idx in pane.visible_range(rows)
    ]
    lines.extend(" " * width for _ in range(rows - len(lines)))
    return lines


def preview_body_lines(preview: PreviewContent, rows: int, width: int, active: bool) -> list[str]:
    if isinstance(preview, NestedPane):
        return pane_lines(preview.pane, rows, width, active)
    if isinstance(preview, GlyphArt):
        body = list(preview.lines[:rows])
    elif isinstance(preview, RawText):
        body = highlight_text(preview.content, preview.path, rows)
    else:
        body = [""] * rows
        if isinstance(preview, Placeholder):
            message = preview.message
            pad = max(0, (width - display_width(message)) // 2)
            body[rows // 2] = f"{PLACEHOLDER_STYLE}{' ' * pad}{message}{RESET}"
    body = [fit_ansi_line(line, width) + RESET for line in body[:rows]]
    body.extend(" " * width for _ in range(rows - len(body)))
    return body


def preview_title(entry: Entry) -> str:
    if entry.is_error:
        return ""
    if entry.is_parent:
        return ".."
    if not entry.name:
        return str(entry.path)
    return f"{entry.name}/" if entry.is_dir else entry.name


def _border_line(left: str, right: str, label: str, width: int, style: str) -> str:
    inner = max(0, width - 2)
    text = f"─ {label} " if label else ""
    text = clip_ansi_line(text, inner)
    fill = "─" * max(0, inner - display_width(text))
    return f"{style}{left}{text}{fill}{right}{RESET}"


def preview_box_lines(controller: PaneController, layout: Layout) -> list[str]:
    """Bordered preview: title on the top edge, metadata on the bottom edge."""
    width = layout.right_width
    rows = layout.body_rows
    if rows < 3:
        return [" " * width for _ in range(rows)]

    entry = controller.primary.current_entry()
    active = controller.focus is Focus.PREVIEW
    style = BORDER_ACTIVE_STYLE if active else BORDER_INACTIVE_STYLE
    footer = "" if entry.is_error else format_metadata(entry.path)
    if isinstance(controller.preview, RawText) and controller.preview.truncated:
        footer = f"{footer} (truncated)".strip()

    body = preview_body_lines(controller.preview, rows - 2, layout.preview_columns, active)
    lines = [_border_line("╭", "╮", sanitize_terminal_text(preview_title(entry)), width, style)]
    lines.extend(f"{style}│{RESET}{line}{style}│{RESET}" for line in body)
    lines.append(_border_line("╰", "╯", footer, width, style))
    return lines


def status_line(controller: PaneController, columns: int) -> str:
    left = f" {sanitize_terminal_text(shortened_path(controller.final_path))}"
    marked = len(controller.selection)
    right = f"{marked} marked  ? help " if marked else "? help "
    gap = columns - display_width(left) - display_width(right)
    if gap < 1:
        return f"{STATUS_STYLE}{fit_ansi_line(left, columns)}{RESET}"
    return f"{STATUS_STYLE}{left}{' ' * gap}{right}{RESET}"


def build_frame(controller: PaneController, layout: Layout) -> str:
    """Compose a complete frame as one string of positioned ANSI rows."""
    primary_active = controller.focus is Focus.FILE_PICKER
    left = pane_lines(controller.primary, layout.body_rows, layout.left_width, primary_active)
    right = preview_box_lines(controller, layout) if layout.has_preview else []

    out: list[str] = []
    for row in range(layout.body_rows):
        out.append(f"\033[{row + 1};1H")
        out.append(left[row])
        if right:
            out.append(" ")
            out.append(right[row])
        out.append("\033[K")
    out.append(f"\033[{layout.rows};1H")
    out.append(status_line(controller, layout.columns))
    return "".join(out)


__all__ = [
    "Layout",
    "build_frame",
    "compute_layout",
    "format_entry_row",
    "highlight_text",
    "pane_lines",
    "preview_body_lines",
    "preview_title",
    "sanitize_terminal_text",
    "status_line",
]
