# FILE: pages/4_Admin_Tools.py
import streamlit as st

from volley_core.config import new_document, sample_document
from volley_core.session import ensure_state, set_document
from volley_core.validation import run_self_test

ensure_state()
st.title("4. Admin & Self-Test")

if st.button("Run Self-Test"):
    results = run_self_test()
    st.write(results)

c1, c2 = st.columns(2)
if c1.button("Reset to blank rotation"):
    set_document(new_document(), system="")
    st.success("Editor reset.")
if c2.button("Load sample 4-2"):
    set_document(sample_document(), system="4-2")
    st.success("Sample loaded.")

st.write("Use this page for diagnostics and resets.")
