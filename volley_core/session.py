"""
Streamlit session-state helpers shared by app.py and pages/.
The document lives in session state as a plain dict (model_dump) and is
re-validated on every read.
"""
from __future__ import annotations
from typing import Optional

import streamlit as st

from .config import DEFAULT_CONFIG, new_document
from .models import AppConfig, RotationDocument, phase_key


def ensure_state():
    ss = st.session_state
    ss.setdefault("document", new_document().model_dump())
    ss.setdefault("system", None)
    ss.setdefault("system_choice", None)   # last value picked in the sidebar dropdown
    ss.setdefault("mode", "serving")
    ss.setdefault("phase", "base")
    ss.setdefault("rotation", 1)          # setter position / rotation number
    ss.setdefault("highlight", None)
    ss.setdefault("show_zones", True)
    ss.setdefault("show_bench", True)
    ss.setdefault("lineup_text", "")
    ss.setdefault("app_config", dict(DEFAULT_CONFIG))

def get_document() -> RotationDocument:
    return RotationDocument.model_validate(st.session_state["document"])

def set_document(doc: RotationDocument, system: Optional[str] = None):
    ss = st.session_state
    ss["document"] = doc.model_dump()
    if system is not None:
        ss["system"] = system
    # keep the current phase valid for the current mode
    phases = doc.phases.get(ss["mode"], [])
    if phases and ss["phase"] not in phases:
        ss["phase"] = phases[0]

def get_config() -> AppConfig:
    return AppConfig(**st.session_state["app_config"])

def current_key() -> str:
    ss = st.session_state
    return phase_key(ss["mode"], ss["phase"])

def lineup_arg() -> Optional[str]:
    text = (st.session_state.get("lineup_text") or "").strip()
    return text or None
