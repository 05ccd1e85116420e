# FILE: pages/2_Position_Editor.py
from __future__ import annotations

import pandas as pd
import streamlit as st

from volley_core.constants import MODES, ROTATIONS
from volley_core.court import render_court_svg
from volley_core.editor import (
    add_phase, copy_positions, fill_standard_positions, remove_phase, send_to_bench, set_position,
)
from volley_core.errors import EditorError, RotationError
from volley_core.models import ALL_PHASE_KEYS
from volley_core.session import current_key, ensure_state, get_config, get_document, lineup_arg, set_document
from volley_core.zones import resolve_lineup

ensure_state()
ss = st.session_state
st.title("2. Position Editor")

doc = get_document()

# ---------- Phase configuration ----------
with st.sidebar:
    st.header("Phases")
    for mode in MODES:
        st.caption(mode.capitalize())
        for phase in doc.phases.get(mode, []):
            c1, c2 = st.columns([3, 1])
            c1.write(phase.capitalize())
            if c2.button("✕", key=f"rm_{mode}_{phase}", help="Remove phase"):
                try:
                    set_document(remove_phase(doc, mode, phase))
                    st.rerun()
                except EditorError as e:
                    st.error(str(e))
        if st.button("+ Add Phase", key=f"add_{mode}"):
            try:
                set_document(add_phase(doc, mode))
                st.rerun()
            except EditorError as e:
                st.error(str(e))

# ---------- Slot selection ----------
c1, c2, c3 = st.columns(3)
ss["mode"] = c1.selectbox("Mode", MODES, index=MODES.index(ss["mode"]))
phases = doc.phases.get(ss["mode"], []) or ["base"]
if ss["phase"] not in phases:
    ss["phase"] = phases[0]
ss["phase"] = c2.selectbox("Phase", phases, index=phases.index(ss["phase"]), format_func=str.capitalize)
ss["rotation"] = c3.selectbox("Setter position", ROTATIONS, index=ROTATIONS.index(ss["rotation"]))
key = current_key()
rot = ss["rotation"]

left, right = st.columns([2, 3])
with left:
    st.markdown(
        f'<div class="court-card">{render_court_svg(doc, key, rot, highlight=ss["highlight"])}</div>',
        unsafe_allow_html=True,
    )

with right:
    formation = doc.formation(key, rot) or {}
    grid = pd.DataFrame([
        {"id": p.id, "label": p.display,
         "x": formation[p.id][0] if p.id in formation else None,
         "y": formation[p.id][1] if p.id in formation else None}
        for p in doc.players
    ])
    edited = st.data_editor(grid, disabled=["id", "label"], hide_index=True,
                            use_container_width=True, key=f"grid_{key}_{rot}")
    if st.button("Apply coordinates", type="primary"):
        new_doc = doc
        try:
            for _, row in edited.iterrows():
                if pd.isna(row["x"]) or pd.isna(row["y"]):
                    continue
                new_doc = set_position(new_doc, key, rot, row["id"], (row["x"], row["y"]))
            set_document(new_doc)
            st.rerun()
        except EditorError as e:
            st.error(str(e))

    bench_pid = st.selectbox("Send to bench", [None] + doc.player_ids,
                             format_func=lambda i: "(choose)" if i is None else doc.player(i).display)
    if bench_pid and st.button("Send to bench"):
        set_document(send_to_bench(doc, key, rot, bench_pid, get_config().bench_position))
        st.rerun()

st.divider()
st.subheader("Copy positions")
sources = [k for k in ALL_PHASE_KEYS if k in doc.positions]
if not sources:
    st.info("No positions recorded yet.")
else:
    cc1, cc2, cc3 = st.columns(3)
    src_key = cc1.selectbox("Source phase", sources, key="copy_phase")
    src_rot = cc2.selectbox("Source setter position", ROTATIONS, key="copy_rot")
    if cc3.button("Copy into current"):
        try:
            set_document(copy_positions(doc, src_key, src_rot, key, rot))
            st.rerun()
        except EditorError as e:
            st.error(str(e))

st.subheader("Standard grid")
st.caption("Place the lineup on zone centers for all six rotations of this phase.")
if st.button("Fill standard positions"):
    try:
        lineup = resolve_lineup(doc, lineup_arg()).lineup
        set_document(fill_standard_positions(doc, key, lineup))
        st.rerun()
    except RotationError as e:
        st.error(f"{e}. Set the lineup on the Reports page first.")
