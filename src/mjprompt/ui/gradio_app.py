"""
Gradio web UI for mjprompt.

Single-page prompt builder: subject text, algorithm and aspect, stylize, seed,
video, the five attribute axes with editable option lists, and the theme list.
The compiled command is shown on every change and copied to the clipboard
automatically (copy on change) or with the Copy button.

Event handlers are plain functions of a PromptSession so they can be exercised
without a running server; _build_blocks wires them to components.
"""

import atexit
import html
from typing import Any

import gradio as gr

from mjprompt import (
    AXES,
    Algorithm,
    ChoiceSet,
    PromptSession,
    PromptStore,
    Settings,
    ThemeList,
    __version__,
)
from mjprompt.core.algorithm import parse_aspect
from mjprompt.core.prompt import MAX_SEED, MAX_STYLIZE, MIN_STYLIZE
from mjprompt.logging_config import get_logger

logger = get_logger(__name__)

BASE_PAGE_TITLE = "Midjourney Prompt Generator"

# Dropdown value meaning "no selection"; empty options are never offered
NONE_VALUE = ""
NONE_LABEL = "none"

AXIS_LABELS = {
    "style": "Style",
    "color": "Color",
    "body": "Body",
    "hair": "Hair color",
    "pose": "Pose",
}

# (command, status_html) returned by every handler that can change the command
Refresh = tuple[str, str]


def _format_status(message: str, status_type: str = "info") -> str:
    """
    Format a status message with color and icon.

    Args:
        message: The status message text.
        status_type: One of "info", "success", "error", "warning", "idle".

    Returns:
        HTML-formatted status string.
    """
    if status_type == "success":
        icon = "✅"
        color = "#10b981"  # green-500
        bg_color = "#d1fae5"  # green-100
    elif status_type == "error":
        icon = "❌"
        color = "#ef4444"  # red-500
        bg_color = "#fee2e2"  # red-100
    elif status_type == "warning":
        icon = "⚠️"
        color = "#f59e0b"  # amber-500
        bg_color = "#fef3c7"  # amber-100
    elif status_type == "info":
        icon = "ℹ️"
        color = "#3b82f6"  # blue-500
        bg_color = "#dbeafe"  # blue-100
    else:  # idle
        return ""

    text = html.escape(message).replace("\n", "<br>")
    return f"""<div style="padding: 12px 16px; border-radius: 8px; background-color: {bg_color}; border-left: 4px solid {color}; margin: 8px 0;">
    <span style="font-size: 16px; margin-right: 8px;">{icon}</span>
    <span style="color: {color}; font-weight: 500;">{text}</span>
</div>"""


def _status_html(session: PromptSession) -> str:
    """Render the session's last copy status."""
    status = session.config.copied_command
    if not status:
        return _format_status("", "idle")
    if session.last_error is not None:
        return _format_status(status, "error")
    return _format_status(status, "success")


def _refresh(session: PromptSession, previous_command: str) -> Refresh:
    session.refresh(previous_command)
    return session.command, _status_html(session)


def _aspect_choices(algorithm: Algorithm) -> list[tuple[str, str]]:
    """(label, value) pairs for the aspect dropdown."""
    return [(aspect.label, aspect.value) for aspect in algorithm.allowed_aspects()]


def _axis_choices(choice_set: ChoiceSet) -> list[tuple[str, str]]:
    """(label, value) pairs for an axis dropdown, led by the 'none' entry."""
    return [(NONE_LABEL, NONE_VALUE)] + [(option, option) for option in choice_set.selectable()]


def _axis_value(choice_set: ChoiceSet) -> str:
    current = choice_set.current
    if current is not None and current in choice_set.selectable():
        return current
    return NONE_VALUE


def _lines_text(values: list[str]) -> str:
    return "\n".join(values)


def _apply_lines(
    values: list[str],
    text: str,
    *,
    edit: Any,
    add: Any,
    remove: Any,
) -> None:
    """Apply a one-entry-per-line text to a list in place: edit, then grow or shrink at the end."""
    lines = text.split("\n") if text else [""]
    for index, line in enumerate(lines):
        if index >= len(values):
            add()
        if values[index] != line:
            edit(index, line)
    while len(values) > len(lines):
        before = len(values)
        remove(len(values) - 1)
        if len(values) == before:
            break


def _apply_options_text(choice_set: ChoiceSet, text: str) -> None:
    _apply_lines(
        choice_set.options,
        text,
        edit=choice_set.edit_option,
        add=choice_set.add_option,
        remove=choice_set.remove_option,
    )


def _theme_labels(themes: ThemeList) -> list[str]:
    return [label for label, _ in themes.entries]


def _apply_themes_text(themes: ThemeList, text: str) -> None:
    labels = _theme_labels(themes)
    lines = text.split("\n") if text.strip() else []
    for index, line in enumerate(lines):
        if index >= len(labels):
            themes.add()
            labels.append("")
        if labels[index] != line:
            themes.edit_label(index, line)
    while len(themes) > len(lines):
        themes.remove(len(themes) - 1)


def _theme_choices(themes: ThemeList) -> list[tuple[str, str]]:
    """(label, index) pairs for the theme checkbox group; blank labels are skipped."""
    return [
        (label.strip(), str(index))
        for index, (label, _) in enumerate(themes.entries)
        if label.strip()
    ]


def _theme_value(themes: ThemeList) -> list[str]:
    return [
        str(index)
        for index, (label, enabled) in enumerate(themes.entries)
        if enabled and label.strip()
    ]


# --- handlers -------------------------------------------------------------


def _on_text_change(session: PromptSession, text: str) -> tuple[str, str, bool]:
    """Returns (command, status_html, copy_enabled)."""
    previous = session.command
    session.config.set_text(text or "")
    command, status = _refresh(session, previous)
    return command, status, session.can_copy


def _on_algorithm_change(
    session: PromptSession, value: str
) -> tuple[list[tuple[str, str]], str, str, str]:
    """Returns (aspect_choices, aspect_value, command, status_html)."""
    previous = session.command
    algorithm = Algorithm(value)
    session.config.set_algorithm(algorithm)
    command, status = _refresh(session, previous)
    return _aspect_choices(algorithm), session.config.aspect.value, command, status


def _on_aspect_change(session: PromptSession, value: str) -> Refresh:
    previous = session.command
    session.config.set_aspect(parse_aspect(value))
    return _refresh(session, previous)


def _on_stylize_change(session: PromptSession, value: float | None) -> Refresh:
    previous = session.command
    if value is not None:
        session.config.set_stylize(int(value))
    return _refresh(session, previous)


def _on_reset_stylize(session: PromptSession) -> tuple[int, str, str]:
    """Returns (stylize, command, status_html)."""
    previous = session.command
    session.config.reset_stylize()
    command, status = _refresh(session, previous)
    return session.config.stylize, command, status


def _on_seed_change(session: PromptSession, use_seed: bool, seed: float | None) -> Refresh:
    previous = session.command
    session.config.set_use_seed(bool(use_seed))
    if seed is not None:
        session.config.set_seed(int(seed))
    return _refresh(session, previous)


def _on_video_change(session: PromptSession, video: bool) -> Refresh:
    previous = session.command
    session.config.set_video(bool(video))
    return _refresh(session, previous)


def _on_copy_on_change(session: PromptSession, enabled: bool) -> bool:
    """Returns whether the manual Copy button should be shown."""
    session.config.set_copy_on_change(bool(enabled))
    return not session.config.copy_on_change


def _on_select(session: PromptSession, axis: str, value: str | None) -> Refresh:
    previous = session.command
    session.config.axis(axis).select(value or None)
    return _refresh(session, previous)


def _on_options_edit(
    session: PromptSession, axis: str, text: str
) -> tuple[list[tuple[str, str]], str, str, str]:
    """Returns (axis_choices, axis_value, command, status_html)."""
    previous = session.command
    choice_set = session.config.axis(axis)
    _apply_options_text(choice_set, text or "")
    command, status = _refresh(session, previous)
    return _axis_choices(choice_set), _axis_value(choice_set), command, status


def _on_themes_select(session: PromptSession, selected: list[str] | None) -> Refresh:
    previous = session.command
    themes = session.config.themes
    enabled = set(selected or [])
    for index, (label, _) in enumerate(themes.entries):
        if label.strip():
            themes.set_enabled(index, str(index) in enabled)
    return _refresh(session, previous)


def _on_themes_edit(
    session: PromptSession, text: str
) -> tuple[list[tuple[str, str]], list[str], str, str]:
    """Returns (theme_choices, theme_value, command, status_html)."""
    previous = session.command
    themes = session.config.themes
    _apply_themes_text(themes, text or "")
    command, status = _refresh(session, previous)
    return _theme_choices(themes), _theme_value(themes), command, status


def _on_copy_click(session: PromptSession) -> str:
    session.copy()
    return _status_html(session)


# --- layout ---------------------------------------------------------------


def _build_blocks(session: PromptSession) -> gr.Blocks:
    """Build the Gradio Blocks UI bound to one session."""
    config = session.config

    with gr.Blocks(title=BASE_PAGE_TITLE) as app:
        gr.Markdown(f"## {BASE_PAGE_TITLE}\n<small>v{__version__}</small>")

        with gr.Accordion("Settings", open=False):
            copy_on_change_cb = gr.Checkbox(
                label="Copy on change",
                value=config.copy_on_change,
                info="Copy command to clipboard when changed.",
            )

        prompt_tb = gr.Textbox(
            label="Prompt",
            value=config.text,
            placeholder="Describe the subject…",
            lines=4,
        )

        with gr.Row():
            with gr.Column():
                algorithm_radio = gr.Radio(
                    label="Algorithm",
                    choices=[algorithm.value for algorithm in Algorithm],
                    value=config.algorithm.value,
                )
                aspect_dd = gr.Dropdown(
                    label="Aspect",
                    choices=_aspect_choices(config.algorithm),
                    value=config.aspect.value,
                )
                with gr.Row():
                    stylize_slider = gr.Slider(
                        label="Stylize",
                        minimum=MIN_STYLIZE,
                        maximum=MAX_STYLIZE,
                        step=1,
                        value=config.stylize,
                    )
                    reset_stylize_btn = gr.Button("Reset", size="sm")
                with gr.Row():
                    use_seed_cb = gr.Checkbox(label="Seed", value=config.use_seed)
                    seed_nb = gr.Number(
                        label="Seed value",
                        value=config.seed,
                        minimum=0,
                        maximum=MAX_SEED,
                        precision=0,
                    )
                video_cb = gr.Checkbox(label="Video", value=config.video)
            with gr.Column():
                theme_cbg = gr.CheckboxGroup(
                    label="Themes",
                    choices=_theme_choices(config.themes),
                    value=_theme_value(config.themes),
                )
                with gr.Accordion("Edit themes", open=False):
                    themes_tb = gr.Textbox(
                        label="One theme per line",
                        value=_lines_text(_theme_labels(config.themes)),
                        lines=4,
                    )

        axis_dropdowns: dict[str, Any] = {}
        axis_editors: dict[str, Any] = {}
        with gr.Row():
            for axis in AXES:
                choice_set = config.axis(axis)
                with gr.Column(min_width=160):
                    axis_dropdowns[axis] = gr.Dropdown(
                        label=AXIS_LABELS[axis],
                        choices=_axis_choices(choice_set),
                        value=_axis_value(choice_set),
                    )
                    with gr.Accordion("Edit", open=False):
                        axis_editors[axis] = gr.Textbox(
                            label="One option per line",
                            value=_lines_text(choice_set.options),
                            lines=4,
                        )

        command_tb = gr.Textbox(label="Command", value=session.command, interactive=False)
        copy_btn = gr.Button(
            "Copy",
            variant="primary",
            interactive=session.can_copy,
            visible=not config.copy_on_change,
        )
        status_html = gr.HTML(value=_status_html(session))

        refresh_outputs = [command_tb, status_html]

        def text_change(text: str) -> tuple[str, str, Any]:
            command, status, can_copy = _on_text_change(session, text)
            return command, status, gr.update(interactive=can_copy)

        prompt_tb.change(
            fn=text_change, inputs=[prompt_tb], outputs=[command_tb, status_html, copy_btn]
        )

        def algorithm_change(value: str) -> tuple[Any, str, str]:
            choices, aspect, command, status = _on_algorithm_change(session, value)
            return gr.update(choices=choices, value=aspect), command, status

        algorithm_radio.change(
            fn=algorithm_change, inputs=[algorithm_radio], outputs=[aspect_dd, *refresh_outputs]
        )
        aspect_dd.change(
            fn=lambda value: _on_aspect_change(session, value),
            inputs=[aspect_dd],
            outputs=refresh_outputs,
        )
        stylize_slider.release(
            fn=lambda value: _on_stylize_change(session, value),
            inputs=[stylize_slider],
            outputs=refresh_outputs,
        )
        reset_stylize_btn.click(
            fn=lambda: _on_reset_stylize(session),
            inputs=[],
            outputs=[stylize_slider, *refresh_outputs],
        )
        for component in (use_seed_cb, seed_nb):
            component.change(
                fn=lambda use_seed, seed: _on_seed_change(session, use_seed, seed),
                inputs=[use_seed_cb, seed_nb],
                outputs=refresh_outputs,
            )
        video_cb.change(
            fn=lambda value: _on_video_change(session, value),
            inputs=[video_cb],
            outputs=refresh_outputs,
        )
        copy_on_change_cb.change(
            fn=lambda value: gr.update(visible=_on_copy_on_change(session, value)),
            inputs=[copy_on_change_cb],
            outputs=[copy_btn],
        )

        for axis in AXES:

            def select(value: str | None, axis: str = axis) -> Refresh:
                return _on_select(session, axis, value)

            def edit(text: str, axis: str = axis) -> tuple[Any, str, str]:
                choices, value, command, status = _on_options_edit(session, axis, text)
                return gr.update(choices=choices, value=value), command, status

            axis_dropdowns[axis].change(
                fn=select, inputs=[axis_dropdowns[axis]], outputs=refresh_outputs
            )
            axis_editors[axis].blur(
                fn=edit,
                inputs=[axis_editors[axis]],
                outputs=[axis_dropdowns[axis], *refresh_outputs],
            )

        theme_cbg.input(
            fn=lambda selected: _on_themes_select(session, selected),
            inputs=[theme_cbg],
            outputs=refresh_outputs,
        )

        def themes_edit(text: str) -> tuple[Any, str, str]:
            choices, value, command, status = _on_themes_edit(session, text)
            return gr.update(choices=choices, value=value), command, status

        themes_tb.blur(fn=themes_edit, inputs=[themes_tb], outputs=[theme_cbg, *refresh_outputs])

        copy_btn.click(fn=lambda: _on_copy_click(session), inputs=[], outputs=[status_html])

    return app


def launch(settings: Settings | None = None) -> None:
    """
    Open the stored prompt, build the app and launch the server.

    The prompt document is saved once when the process exits.

    Args:
        settings: Host, port, share and data location (default: Settings.from_env()).
    """
    settings = settings or Settings.from_env()
    session = PromptSession.open(PromptStore(settings.document_path))
    atexit.register(session.close)

    logger.info(
        "mjprompt ui is starting (v%s) on http://%s:%s",
        __version__,
        settings.ui_host,
        settings.ui_port,
    )
    app = _build_blocks(session)
    app.launch(
        server_name=settings.ui_host,
        server_port=settings.ui_port,
        share=settings.ui_share,
        inbrowser=True,
    )


__all__ = ["launch"]
