# app.py
from __future__ import annotations

import pandas as pd
import streamlit as st

from volley_core.config import SYSTEMS_MANIFEST, ensure_assets_exist, system_path, ui_css
from volley_core.constants import COLORS, MODES, ROTATIONS
from volley_core.court import render_court_svg
from volley_core.errors import RotationError
from volley_core.geometry import is_bench, is_serving
from volley_core.io import load_document, load_systems_manifest
from volley_core.logging_utils import configure_logging
from volley_core.session import current_key, ensure_state, get_config, get_document, lineup_arg, set_document
from volley_core.validation import validate_document

# ---------- Page & Theme ----------
st.set_page_config(page_title="Volleyball Rotations", layout="wide")
st.markdown(ui_css(), unsafe_allow_html=True)

configure_logging("INFO")
ensure_assets_exist()
ensure_state()
ss = st.session_state

# ---------- Sidebar: system, mode, phase, rotation ----------
with st.sidebar:
    st.header("🏐 Rotation System")
    systems = load_systems_manifest(SYSTEMS_MANIFEST)
    idx = systems.index(ss["system"]) if ss["system"] in systems else 0
    choice = st.selectbox("System", systems, index=idx)
    if choice != ss["system_choice"]:
        ss["system_choice"] = choice
        try:
            set_document(load_document(system_path(choice)), system=choice)
            ss["highlight"] = None
        except RotationError as e:
            st.error(str(e))

    upload = st.file_uploader("Import rotation JSON", type=["json"])
    if upload is not None and st.button("Load uploaded file"):
        try:
            set_document(load_document(upload), system=upload.name)
            st.success(f"Successfully imported: {get_document().name}")
        except RotationError as e:
            st.error(f"Error importing JSON: {e}")

    st.divider()
    doc = get_document()
    mode = st.radio("Mode", MODES, index=MODES.index(ss["mode"]), horizontal=True)
    if mode != ss["mode"]:
        ss["mode"] = mode
        ss["phase"] = (doc.phases.get(mode) or ["base"])[0]
    phases = doc.phases.get(ss["mode"], []) or ["base"]
    if ss["phase"] not in phases:
        ss["phase"] = phases[0]
    ss["phase"] = st.radio("Phase", phases, index=phases.index(ss["phase"]),
                           format_func=str.capitalize, horizontal=True)
    ss["rotation"] = st.radio("Setter position (rotation)", ROTATIONS,
                              index=ROTATIONS.index(ss["rotation"]), horizontal=True)
    ss["show_zones"] = st.checkbox("Show zones", value=ss["show_zones"])
    ss["show_bench"] = st.checkbox("Show bench", value=ss["show_bench"])

# ---------- Main ----------
doc = get_document()
key = current_key()
st.title(doc.name)
st.caption(doc.description)

left, right = st.columns([3, 2])
with left:
    labels = {p.id: p.display for p in doc.players}
    ss["highlight"] = st.selectbox(
        "Highlight player", [None] + list(labels),
        index=([None] + list(labels)).index(ss["highlight"]) if ss["highlight"] in labels else 0,
        format_func=lambda pid: "(none)" if pid is None else labels[pid],
    )
    svg = render_court_svg(doc, key, ss["rotation"], highlight=ss["highlight"],
                           show_bench=ss["show_bench"], show_zones=ss["show_zones"])
    st.markdown(f'<div class="court-card">{svg}</div>', unsafe_allow_html=True)
    st.markdown(
        '<div class="legend">'
        f'<span><span class="dot" style="background:{COLORS["player"]}"></span>player</span>'
        f'<span><span class="dot" style="background:{COLORS["libero"]}"></span>libero</span>'
        f'<span><span class="dot" style="background:{COLORS["highlight"]}"></span>highlighted</span>'
        "</div>",
        unsafe_allow_html=True,
    )

with right:
    st.subheader(f"{key} · R{ss['rotation']}")
    formation = doc.formation(key, ss["rotation"])
    if formation is None:
        st.info("No positions recorded for this phase and rotation.")
    else:
        rows = []
        for p in doc.players:
            pos = formation.get(p.id)
            status = "missing" if pos is None else "bench" if is_bench(pos) else "serving" if is_serving(pos) else "court"
            rows.append({"Player": p.display, "Role": p.role, "x": pos[0] if pos else None,
                         "y": pos[1] if pos else None, "Status": status})
        st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)

    st.subheader("Rule check")
    try:
        report = validate_document(doc, lineup_arg(), get_config())
    except RotationError as e:
        st.warning(f"Validation unavailable: {e}")
    else:
        here = report.findings_for(key, ss["rotation"])
        if not here:
            st.success("No findings for this formation.")
        for f in here:
            (st.error if f.severity == "error" else st.warning)(f.message)
        st.caption(f"Whole document: {report.error_count} error(s), {report.warning_count} warning(s)")
