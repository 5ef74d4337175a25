import streamlit as st
from drinkchain.ui.api_client import get_client, APIError
from drinkchain.ui.state import SUPPLY_FILTERS, get_supply_filter, set_supply_filter

st.title("供需")

client = get_client()

FILTER_LABELS = {"ALL": "全部", "SUPPLY": "供应", "DEMAND": "采购"}

# --- Publish ---
with st.expander("发布供需信息", expanded=False):
    with st.form("publish_listing"):
        kind = st.radio("类型", ["SUPPLY", "DEMAND"], format_func={"SUPPLY": "我是供应商", "DEMAND": "我有采购需求"}.get, horizontal=True)
        product = st.text_input("产品名称", placeholder="例如: 云南小粒咖啡豆")
        price = st.text_input("价格说明", placeholder="例如: ¥50/kg")
        company = st.text_input("公司/店铺")
        location = st.text_input("地点", placeholder="例如: 上海")
        validity = st.selectbox("有效期", [7, 15, 30], format_func=lambda d: f"{d}天")
        if st.form_submit_button("立即发布"):
            if not all(v.strip() for v in (product, price, company, location)):
                st.error("请填写所有字段。")
            else:
                try:
                    client.publish_supply({
                        "type": kind,
                        "product": product,
                        "companyName": company,
                        "price": price,
                        "location": location,
                        "validityDays": validity,
                    })
                    st.success("发布成功。")
                    st.rerun()
                except APIError as e:
                    st.error(f"Failed: {e.detail}")

# --- Filter + refresh ---
c1, c2 = st.columns([3, 1])
selected = c1.radio(
    "筛选", SUPPLY_FILTERS, index=SUPPLY_FILTERS.index(get_supply_filter()),
    format_func=FILTER_LABELS.get, horizontal=True,
)
set_supply_filter(selected)
if c2.button("刷新"):
    with st.spinner("正在生成供需信息..."):
        try:
            client.refresh_supply()
        except APIError as e:
            st.error(f"Failed: {e.detail}")

with st.spinner("正在加载供需信息..."):
    try:
        listings = client.list_supply(selected)
    except APIError as e:
        st.error(f"Failed to load listings: {e.detail}")
        st.stop()

if listings.recommendation:
    st.info(f"✨ {listings.recommendation}")
if not listings.items:
    st.info("暂无有效的供需信息。")
for entry in listings.items:
    item = entry.item
    with st.container(border=True):
        c1, c2 = st.columns([4, 1])
        badge = "供应" if item.type.value == "SUPPLY" else "采购"
        verified = " ✅" if item.verified else ""
        c1.markdown(f"**[{badge}] {item.product}**{verified}")
        c1.caption(f"{item.company_name} · {item.location}")
        c2.markdown(f"**{item.price}**")
        c2.caption(f"剩 {entry.remaining_days} 天")
