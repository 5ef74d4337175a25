"""Session-state helpers for the Streamlit UI.

Only reads/writes ``st.session_state``.
"""
import uuid

import streamlit as st

SUPPLY_FILTERS = ("ALL", "SUPPLY", "DEMAND")


def init_session() -> None:
    """Initialize session state variables."""
    if "chat_session_id" not in st.session_state:
        st.session_state["chat_session_id"] = uuid.uuid4().hex
    if "supply_filter" not in st.session_state:
        st.session_state["supply_filter"] = "ALL"


def get_chat_session_id() -> str:
    """Chat session id for this browser session."""
    init_session()
    return st.session_state["chat_session_id"]


def get_supply_filter() -> str:
    init_session()
    return st.session_state["supply_filter"]


def set_supply_filter(value: str) -> None:
    if value not in SUPPLY_FILTERS:
        raise ValueError(f"Unknown supply filter: {value}")
    st.session_state["supply_filter"] = value
