"""Streamlit web app for the Dani.ai photo editor."""

import logging

import streamlit as st

from dani_ai.client import ImageEditClient
from dani_ai.config import configure_logging
from dani_ai.modes import AGE_OPTIONS, get_available_modes, get_mode_preset
from dani_ai.session import EditorSession
from dani_ai.utils import decode_data_uri, get_supported_formats

logger = logging.getLogger(__name__)

TOOL_COLUMNS = 4


def init_state() -> None:
    """Create the per-user objects on the first run of a browser session."""
    if 'editor' not in st.session_state:
        st.session_state.editor = EditorSession()
    if 'edit_client' not in st.session_state:
        st.session_state.edit_client = ImageEditClient()
    if 'camera_modal' not in st.session_state:
        st.session_state.camera_modal = False
    if 'uploader_round' not in st.session_state:
        # Bumped on reset so the upload widgets start empty
        st.session_state.uploader_round = 0
    if 'loaded_file_id' not in st.session_state:
        st.session_state.loaded_file_id = None


def is_new_file(uploaded_file) -> bool:
    """Whether an uploaded file has not been loaded yet.

    Streamlit returns the same file on every rerun, so each one is loaded
    only once.
    """
    file_id = getattr(uploaded_file, 'file_id', None) or (uploaded_file.name, uploaded_file.size)
    if st.session_state.loaded_file_id == file_id:
        return False
    st.session_state.loaded_file_id = file_id
    return True


def render_input(editor: EditorSession) -> None:
    """Upload, drag-and-drop and camera controls, plus the original photo."""
    round_key = st.session_state.uploader_round

    if editor.asset is None:
        st.subheader("Upload Photo")
        picked = st.file_uploader(
            "Choose from Device",
            type=get_supported_formats(),
            key=f"picker_{round_key}",
        )
        if picked is not None and is_new_file(picked):
            editor.load_upload(picked.name, picked.getvalue(), picked.type)
            st.rerun()

        dropped = st.file_uploader(
            "Drag & drop a photo here",
            key=f"drop_{round_key}",
        )
        if dropped is not None and is_new_file(dropped):
            if editor.load_drop(dropped.name, dropped.getvalue(), dropped.type) is not None:
                st.rerun()

        if not st.session_state.camera_modal:
            if st.button("Open Camera", width="stretch"):
                st.session_state.camera_modal = True
                st.rerun()
        else:
            render_camera(editor)
    else:
        try:
            st.image(editor.asset.preview, caption="ORIGINAL", width="stretch")
        except ValueError as e:
            st.error(str(e))
        if st.button("Remove photo", key="remove_photo"):
            editor.reset()
            st.session_state.pop("custom_prompt", None)
            st.session_state.uploader_round += 1
            st.session_state.loaded_file_id = None
            st.rerun()


def render_camera(editor: EditorSession) -> None:
    """Capture modal backed by the browser camera."""
    shot = st.camera_input("Take a photo", key=f"camera_{st.session_state.uploader_round}")
    if shot is not None and is_new_file(shot):
        editor.accept_capture(shot.getvalue(), shot.type or 'image/jpeg')
        st.session_state.camera_modal = False
        st.rerun()
    if st.button("Close Camera"):
        editor.close_camera()
        st.session_state.camera_modal = False
        st.rerun()


def render_tools(editor: EditorSession) -> None:
    """Mode grid and the options of the selected mode."""
    st.caption("AI TOOLS")
    modes = get_available_modes()
    columns = st.columns(TOOL_COLUMNS)
    for i, mode in enumerate(modes):
        preset = get_mode_preset(mode)
        with columns[i % TOOL_COLUMNS]:
            if st.button(
                preset.label,
                key=f"tool_{mode.value}",
                type="primary" if mode == editor.mode else "secondary",
                width="stretch",
            ):
                editor.select_mode(mode)
                st.session_state.pop("custom_prompt", None)
                st.rerun()

    preset = editor.preset
    with st.container(border=True):
        if preset.needs_age:
            st.caption("TARGET AGE")
            labels = [label for label, _ in AGE_OPTIONS]
            current = [value for _, value in AGE_OPTIONS].index(editor.age_direction)
            choice = st.radio("Target Age", labels, index=current, horizontal=True,
                              label_visibility="collapsed")
            editor.set_age_direction(dict(AGE_OPTIONS)[choice])
        elif preset.needs_prompt:
            st.caption("CUSTOM INSTRUCTIONS")
            text = st.text_area(
                "Custom Instructions",
                value=editor.custom_prompt,
                placeholder=preset.placeholder,
                key="custom_prompt",
                label_visibility="collapsed",
            )
            editor.set_custom_prompt(text)
        else:
            st.info(preset.ready_message())


def render_result(editor: EditorSession) -> None:
    """Generated image and its download button."""
    if editor.result_image is None:
        return

    st.subheader("Generated Result")
    image_bytes = decode_data_uri(editor.result_image)
    st.image(image_bytes, width="stretch")
    st.download_button(
        "Download HD",
        data=image_bytes,
        file_name=editor.download_name(),
        mime="image/png",
    )


def main():
    """Main function for the Streamlit web app."""
    st.set_page_config(page_title="Dani.ai", page_icon="🪄", layout="wide")
    configure_logging()
    init_state()
    editor: EditorSession = st.session_state.editor

    st.title("Dani.ai")

    left, right = st.columns([5, 7])

    with left:
        render_input(editor)

    with right:
        render_tools(editor)

        if st.button(
            "Generate Result",
            key="generate",
            type="primary",
            disabled=not editor.can_generate,
            width="stretch",
        ):
            with st.spinner("Processing Image..."):
                editor.generate(st.session_state.edit_client)

        if editor.error:
            st.error(editor.error)

        render_result(editor)


if __name__ == "__main__":
    main()
