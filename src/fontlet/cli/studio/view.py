"""Draw the picker: a pure function from session state to screen lines."""

from __future__ import annotations

import textwrap
from typing import Callable

from fontlet.app.session import LOADING_SCREENS, Screen, Session, Slot
from fontlet.cli.core.ansi_text import truncate
from fontlet.cli.core.layout import DOC_MARGIN_COLS, DOC_MARGIN_ROWS
from fontlet.cli.widgets.base import Rect
from fontlet.cli.widgets.status_bar import Shortcut, StatusBarWidget
from fontlet.config import AppConfig
from fontlet.core.text import line_count

TITLE = "FontLet"
SPINNER_FRAMES = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")

FOOTER_SHORTCUTS: dict[Screen, tuple[Shortcut, ...]] = {
    Screen.INITIAL_LOADING: (Shortcut("ctrl+c", "quit"),),
    Screen.INPUT_TEXT: (Shortcut("enter", "confirm text"), Shortcut("ctrl+c", "quit")),
    Screen.LOADING_PREVIEWS: (Shortcut("esc", "change text"), Shortcut("ctrl+c", "quit")),
    Screen.SELECT_FONT: (
        Shortcut("↑/↓", "navigate"),
        Shortcut("enter", "select font"),
        Shortcut("/", "filter"),
        Shortcut("esc", "change text"),
        Shortcut("ctrl+c", "quit"),
    ),
    Screen.GENERATING_OUTPUT: (Shortcut("esc", "back to font list"), Shortcut("ctrl+c", "quit")),
    Screen.OUTPUT_CHOICE: (
        Shortcut("t", "terminal"),
        Shortcut("f", "file"),
        Shortcut("esc", "back to font list"),
        Shortcut("ctrl+c", "quit"),
    ),
    Screen.SAVE_FILENAME_INPUT: (
        Shortcut("enter", "save file"),
        Shortcut("esc", "cancel save"),
        Shortcut("ctrl+c", "quit"),
    ),
    Screen.DISPLAY_OUTPUT: (
        Shortcut("↑/↓/pgup/pgdn", "scroll"),
        Shortcut("esc/q", "back to font list"),
        Shortcut("ctrl+c", "quit"),
    ),
    Screen.STATUS_MESSAGE: (Shortcut("any key", "continue"),),
    Screen.ERROR: (Shortcut("any key", "quit"),),
}


def spinner(session: Session) -> str:
    return SPINNER_FRAMES[session.spinner_frame % len(SPINNER_FRAMES)]


def render_screen(session: Session, config: AppConfig) -> list[str]:
    """
    Lay out the whole screen for the current session.

    Returns at most ``terminal_height`` lines, none wider than
    ``terminal_width`` visible columns. Reads the session only.
    """
    if not session.size_known:
        return ["Initializing..."]

    theme = config.theme
    layout = session.layout
    content = Rect(0, 0, layout.content_width, layout.content_height)

    body = BODY_RENDERERS[session.screen](session, config, content)
    body = body[:content.height] + [""] * max(0, content.height - len(body))

    lines: list[str] = []
    lines.extend([""] * DOC_MARGIN_ROWS)
    lines.append(theme.paint(theme.title, TITLE))
    lines.append("")
    lines.extend(body)
    lines.append("")
    lines.append(_render_footer(session, config, content.width))
    lines.extend([""] * DOC_MARGIN_ROWS)

    margin = " " * DOC_MARGIN_COLS
    framed = [truncate(margin + line, layout.term_width) if line else "" for line in lines]
    return framed[:layout.term_height]


def _render_footer(session: Session, config: AppConfig, width: int) -> str:
    theme = config.theme
    bar = StatusBarWidget(theme=theme)
    if session.screen in LOADING_SCREENS:
        bar.set_left(theme.paint(theme.spinner, spinner(session)) + " Processing...")
    elif session.screen == Screen.DISPLAY_OUTPUT and session.output_view.max_scroll > 0:
        bar.set_left(theme.paint(theme.status, f"{session.output_view.scroll_percent:3.0f}%"))
    bar.set_shortcuts(FOOTER_SHORTCUTS[session.screen])
    return bar.render(Rect(0, 0, width, 1))[0]


# ----------------------------------------------------------------------
# Screen bodies
# ----------------------------------------------------------------------

def _wrapped(text: str, width: int, style: str, config: AppConfig) -> list[str]:
    rows = textwrap.wrap(text, width=max(1, width)) or [""]
    return [config.theme.paint(style, row) for row in rows]


def _body_loading(session: Session, config: AppConfig, bounds: Rect) -> list[str]:
    theme = config.theme
    if session.screen == Screen.INITIAL_LOADING:
        what = "Looking for figlet fonts..."
    elif session.screen == Screen.LOADING_PREVIEWS:
        what = f"Rendering previews in {len(session.fonts)} fonts..."
    else:
        name = session.selected_font.name if session.selected_font else ""
        what = f"Rendering with {name}..."
    return [
        "",
        f"{theme.paint(theme.spinner, spinner(session))} Please wait...",
        theme.paint(theme.subtitle, what),
    ]


def _body_input_text(session: Session, config: AppConfig, bounds: Rect) -> list[str]:
    theme = config.theme
    count = len(session.fonts)
    return [
        theme.paint(theme.subtitle, f"{count} fonts found. What should they say?"),
        "",
        *session.text_field.render(Rect(0, 0, bounds.width, 1)),
    ]


def _body_select_font(session: Session, config: AppConfig, bounds: Rect) -> list[str]:
    return session.font_list.render(bounds)


def _body_output_choice(session: Session, config: AppConfig, bounds: Rect) -> list[str]:
    theme = config.theme
    name = session.selected_font.name if session.selected_font else ""
    lines_out = line_count(session.full_output.rstrip("\n"))
    return [
        theme.paint(theme.subtitle, f"Rendered with {name}: {lines_out} lines at width {session.output_width}"),
        "",
        *_wrapped(session.status_message, bounds.width, theme.status, config),
    ]


def _body_save_filename(session: Session, config: AppConfig, bounds: Rect) -> list[str]:
    theme = config.theme
    lines = [
        theme.paint(theme.subtitle, "Save output as:"),
        "",
        *session.filename_field.render(Rect(0, 0, bounds.width, 1)),
    ]
    if Slot.SAVE in session.pending:
        lines.extend(["", theme.paint(theme.status, "Saving...")])
    return lines


def _body_display_output(session: Session, config: AppConfig, bounds: Rect) -> list[str]:
    return session.output_view.render(bounds)


def _body_status_message(session: Session, config: AppConfig, bounds: Rect) -> list[str]:
    theme = config.theme
    style = theme.error if session.status_is_error else theme.success
    return ["", *_wrapped(session.status_message, bounds.width, style, config)]


def _body_error(session: Session, config: AppConfig, bounds: Rect) -> list[str]:
    return _wrapped(session.error_message, bounds.width, config.theme.error, config)


BODY_RENDERERS: dict[Screen, Callable[[Session, AppConfig, Rect], list[str]]] = {
    Screen.INITIAL_LOADING: _body_loading,
    Screen.INPUT_TEXT: _body_input_text,
    Screen.LOADING_PREVIEWS: _body_loading,
    Screen.SELECT_FONT: _body_select_font,
    Screen.GENERATING_OUTPUT: _body_loading,
    Screen.OUTPUT_CHOICE: _body_output_choice,
    Screen.SAVE_FILENAME_INPUT: _body_save_filename,
    Screen.DISPLAY_OUTPUT: _body_display_output,
    Screen.STATUS_MESSAGE: _body_status_message,
    Screen.ERROR: _body_error,
}
