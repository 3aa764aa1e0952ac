from __future__ import annotations

import logging
from typing import Any, Dict, List

import streamlit as st
from pydantic import ValidationError

from export import export_pdf_bytes, export_png_bytes, preview_png
from project_list import format_date_span, project_list_frame
from project_store import ProjectStore
from timeline_models import Settings, sample_projects

logger = logging.getLogger(__name__)

APP_TITLE = "Project Timeline"

_STORE_KEY = "project_store"
_RENDER_KEYS = ("_timeline_png", "_timeline_warnings", "_timeline_settings", "last_png", "last_pdf")


# ----------------------------
# Store wiring
# ----------------------------


def _drop_rendered(_snapshot: Any = None) -> None:
    """Store subscriber: any change to the collection invalidates rendered output."""
    for k in _RENDER_KEYS:
        st.session_state.pop(k, None)


def _get_store(settings: Settings) -> ProjectStore:
    store = st.session_state.get(_STORE_KEY)
    if store is None:
        store = ProjectStore(sample_projects(settings.now()))
        store.subscribe(_drop_rendered)
        st.session_state[_STORE_KEY] = store
        logger.debug("Seeded project store with %d sample project(s)", len(store))
    return store


# ----------------------------
# Rendering helpers
# ----------------------------


def _timeline_png(store: ProjectStore, settings: Settings) -> tuple[bytes, List[str]]:
    """Render once per settings change; store notifications clear the cached image."""
    settings_dump = settings.model_dump()
    if st.session_state.get("_timeline_settings") != settings_dump or "_timeline_png" not in st.session_state:
        png, warnings = preview_png(store.projects, settings)
        st.session_state["_timeline_png"] = png
        st.session_state["_timeline_warnings"] = warnings
        st.session_state["_timeline_settings"] = settings_dump
        for k in ("last_png", "last_pdf"):
            st.session_state.pop(k, None)
    return st.session_state["_timeline_png"], list(st.session_state.get("_timeline_warnings", []))


def _show_timeline(store: ProjectStore, settings: Settings) -> None:
    st.subheader("Timeline")
    try:
        png, warnings = _timeline_png(store, settings)
    except Exception as e:
        st.error(f"Timeline failed to render: {e}")
        st.stop()
    st.image(png, use_container_width=True)
    for w in warnings:
        st.warning(w)


def _show_project_list(store: ProjectStore) -> None:
    st.subheader("Projects")
    if not len(store):
        st.info("No projects.")
        return
    for p in store:
        st.markdown(f"**{p.description}**")
        st.caption(format_date_span(p))

    with st.expander("Table view", expanded=False):
        st.dataframe(project_list_frame(store.projects), hide_index=True, use_container_width=True)


def _show_downloads(store: ProjectStore, settings: Settings) -> None:
    col1, col2 = st.columns(2)

    with col1:
        if st.button("Generate PNG", use_container_width=True):
            try:
                st.session_state["last_png"] = export_png_bytes(store.projects, settings, dpi=300)
            except Exception as e:
                st.error(f"PNG export failed: {e}")
        st.download_button(
            "Download PNG",
            data=st.session_state.get("last_png", b""),
            file_name="timeline.png",
            mime="image/png",
            use_container_width=True,
            disabled=("last_png" not in st.session_state),
        )

    with col2:
        if st.button("Generate PDF", use_container_width=True):
            try:
                st.session_state["last_pdf"] = export_pdf_bytes(store.projects, settings)
            except Exception as e:
                st.error(f"PDF export failed: {e}")
        st.download_button(
            "Download PDF",
            data=st.session_state.get("last_pdf", b""),
            file_name="timeline.pdf",
            mime="application/pdf",
            use_container_width=True,
            disabled=("last_pdf" not in st.session_state),
        )


def _settings_from_sidebar() -> Dict[str, Any]:
    with st.sidebar:
        st.header("Display")
        width = st.slider("Timeline width", min_value=400, max_value=1400, value=700, step=50)
        arrangement = st.radio(
            "Arrangement",
            options=["split", "stacked"],
            format_func=lambda v: "Side by side" if v == "split" else "Stacked",
        )
        whole_day_ticks = st.checkbox(
            "Whole-day marker spacing",
            value=False,
            help="Round the spacing between date markers down to whole days.",
        )
    return {"width": float(width), "arrangement": arrangement, "whole_day_ticks": whole_day_ticks}


def main() -> None:
    st.set_page_config(page_title=APP_TITLE, layout="wide")
    st.title(APP_TITLE)

    try:
        settings = Settings(**_settings_from_sidebar())
    except ValidationError as e:
        st.error(f"Invalid display settings: {e}")
        st.stop()

    store = _get_store(settings)

    if settings.arrangement == "split":
        left, right = st.columns([3, 2])
        with left:
            _show_timeline(store, settings)
        with right:
            _show_project_list(store)
    else:
        _show_timeline(store, settings)
        st.divider()
        _show_project_list(store)

    st.divider()
    _show_downloads(store, settings)


if __name__ == "__main__":
    main()
