# FILE: pages/1_Players.py
import pandas as pd
import streamlit as st

from volley_core.constants import ROLES
from volley_core.editor import add_player, delete_player, update_player
from volley_core.errors import EditorError
from volley_core.session import ensure_state, get_document, set_document

ensure_state()
st.title("1. Players")

doc = get_document()
name = st.text_input("System name", value=doc.name)
desc = st.text_input("Description", value=doc.description)
if name != doc.name or desc != doc.description:
    set_document(doc.model_copy(update={"name": name, "description": desc}))
    doc = get_document()

st.dataframe(
    pd.DataFrame([p.model_dump() for p in doc.players], columns=["id", "label", "role", "isLibero"]),
    hide_index=True, use_container_width=True,
)

st.subheader("Add player")
with st.form("add_player", clear_on_submit=True):
    c1, c2, c3, c4 = st.columns(4)
    pid = c1.text_input("ID")
    label = c2.text_input("Label")
    role = c3.selectbox("Role", ROLES)
    libero = c4.checkbox("Libero")
    if st.form_submit_button("Add"):
        try:
            set_document(add_player(doc, pid, label, role, libero))
            st.rerun()
        except EditorError as e:
            st.error(str(e))

if doc.players:
    st.subheader("Edit or delete")
    ids = doc.player_ids
    target = st.selectbox("Player", ids, format_func=lambda i: doc.player(i).display)
    p = doc.player(target)
    c1, c2, c3 = st.columns(3)
    new_label = c1.text_input("Label", value=p.label, key=f"label_{target}")
    new_role = c2.selectbox("Role", ROLES, index=ROLES.index(p.role), key=f"role_{target}")
    new_lib = c3.checkbox("Libero", value=p.isLibero, key=f"lib_{target}")
    b1, b2 = st.columns(2)
    if b1.button("Save player"):
        try:
            set_document(update_player(doc, target, new_label, new_role, new_lib))
            st.rerun()
        except EditorError as e:
            st.error(str(e))
    if b2.button("Delete player", type="primary"):
        set_document(delete_player(doc, target))
        st.rerun()
