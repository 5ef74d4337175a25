import streamlit as st
from drinkchain.ui.api_client import get_client, APIError
from drinkchain.domain.models import StrategyType, SavedSelection, SystemSelection

st.title("趋势")

client = get_client()

SYSTEM_LABELS = {
    StrategyType.DEFAULT: "综合推荐",
    StrategyType.COST: "成本优先",
    StrategyType.UNIQUE: "独特性",
    StrategyType.QUALITY: "品质优先",
}

try:
    active = client.get_active_strategy()
    saved = client.list_strategies().items
except APIError as e:
    st.error(f"Failed to load strategies: {e.detail}")
    st.stop()

# --- Strategy picker ---
st.caption("选择或创建您的趋势分析策略:")
cols = st.columns(len(SYSTEM_LABELS))
for col, (stype, label) in zip(cols, SYSTEM_LABELS.items()):
    is_active = isinstance(active.selection, SystemSelection) and active.selection.strategy == stype
    if col.button(label, type="primary" if is_active else "secondary", key=f"sys_{stype.value}"):
        client.select_strategy(stype)
        st.rerun()

for strat in saved:
    c1, c2 = st.columns([5, 1])
    is_active = isinstance(active.selection, SavedSelection) and active.selection.strategy_id == strat.id
    if c1.button(strat.name, type="primary" if is_active else "secondary", key=f"saved_{strat.id}"):
        client.select_strategy(StrategyType.CUSTOM, strategy_id=strat.id)
        st.rerun()
    if c2.button("✕", key=f"del_{strat.id}"):
        try:
            client.delete_strategy(strat.id)
            st.rerun()
        except APIError as e:
            st.error(f"Failed: {e.detail}")

with st.expander("自定义分析策略", expanded=False):
    st.caption("请输入三个最重要的判断因子，我们会根据这些因子为您生成定制化的市场报告。")
    with st.form("custom_strategy"):
        name = st.text_input("策略名称 (选填)", placeholder="例如：夏季低卡策略 (输入名称以保存)")
        factors = [st.text_input(f"第 {i + 1} 优先级因子", key=f"factor_{i}") for i in range(3)]
        if st.form_submit_button("生成报告"):
            if not factors[0].strip():
                st.error("第 1 优先级因子为必填项。")
            else:
                try:
                    if name.strip():
                        client.create_strategy(name, factors)
                    else:
                        client.apply_ephemeral(factors)
                    st.rerun()
                except APIError as e:
                    st.error(f"Failed: {e.detail}")

st.divider()

# --- Analysis ---
with st.spinner("正在分析市场趋势..."):
    try:
        analysis = client.get_trends()
    except APIError as e:
        st.error(f"Failed to load trends: {e.detail}")
        st.stop()

result = analysis.result


def _source_caption(source) -> str:
    factors = getattr(source, "factors", None) or []
    suffix = f" · {' / '.join(factors)}" if factors else ""
    return f"{source.label} · 来源: {source.name}{suffix}"


with st.container(border=True):
    st.subheader("市场现状分析")
    st.write(result.market_analysis)
    st.subheader("策略结论")
    st.write(result.strategic_conclusion)
    st.caption(_source_caption(result.source))

if not result.items:
    st.info("暂无趋势数据。")
for item in result.items:
    with st.container(border=True):
        c1, c2 = st.columns([1, 2])
        c1.image(item.image_url)
        c2.markdown(f"**{item.title}**  `{item.category}`  {item.growth_rate}")
        c2.write(item.description)
        c2.caption(_source_caption(item.source))
