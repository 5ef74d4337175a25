"""Streamlit entry point: ``streamlit run src/drinkchain/ui/app.py``."""
import streamlit as st

from drinkchain.ui.state import init_session
from drinkchain.ui.validation import run_all_checks

st.set_page_config(page_title="饮品链", page_icon="🥤")
init_session()

st.title("饮品链 · 供应链AI参谋")
st.caption("趋势分析、供需信息与AI参谋，按您的策略生成。")

errors = run_all_checks()
if errors:
    for err in errors:
        st.error(err)
else:
    st.success("Backend connected.")

st.markdown(
    "- **趋势**: 按策略生成市场分析与趋势预测\n"
    "- **供需**: 浏览与发布B2B供需信息\n"
    "- **AI参谋**: 与供应链顾问对话"
)
