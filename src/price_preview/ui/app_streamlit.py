"""
Streamlit UI for the seller price preview.

Features:
- Create / Edit product flow switch
- Discount, tax and (edit only) promotion pickers in selection order
- Ledger table with every adjustment step
- The pricing payload that would be saved
"""
import streamlit as st
import pandas as pd
import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from price_preview.catalog import ModifierCatalog
from price_preview.config.settings import get_settings
from price_preview.engine import compute, PriceInput, PricePreviewResult
from price_preview.services.product_flows import (
    PersistedProduct,
    initial_edit_selection,
    create_flow_input,
    edit_flow_input,
    create_payload,
    update_payload,
)


st.set_page_config(
    page_title="Product Price Preview",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_catalog():
    """Get cached modifier catalog."""
    return ModifierCatalog.load(get_settings())


@st.cache_data
def cached_compute(price_input: PriceInput) -> PricePreviewResult:
    """Memoized wrapper; the engine itself stays cache-free."""
    return compute(price_input)


try:
    catalog = get_catalog()
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()


# ============================================================================
# SIDEBAR: Flow selection
# ============================================================================
with st.sidebar:
    st.header("🧾 Product Form")

    flow = st.radio("Flow", ["Create product", "Edit product"], key="flow")
    is_edit = flow == "Edit product"

    product = None
    selection = {"promotion_ids": [], "discount_id": None, "tax_ids": []}
    if is_edit:
        with st.container(border=True):
            st.markdown("##### Stored product")
            stored_price = st.number_input("Stored price", min_value=0.0, value=0.0, step=1.0)
            stored_taxes = st.multiselect(
                "Stored taxes", [t.id for t in catalog.taxes], key="stored_taxes"
            )
            stored_promotions = st.multiselect(
                "Stored promotions", [p.id for p in catalog.promotions], key="stored_promotions"
            )
            stored_discount = st.selectbox(
                "Stored discount", [""] + [d.id for d in catalog.discounts], key="stored_discount"
            )
            product = PersistedProduct.from_api({
                "id": "preview",
                "price": stored_price or None,
                "discountId": stored_discount or None,
                "taxes": [{"id": tid, "status": "active"} for tid in stored_taxes],
                "promotions": [{"id": pid, "status": "active"} for pid in stored_promotions],
            })
            # The edit form opens with the stored selection
            selection = initial_edit_selection(product)

    st.divider()

    if st.button("🔄 Reload catalog"):
        catalog.reload()
        st.rerun()

    st.caption(
        f"{len(catalog.promotions)} promotions | "
        f"{len(catalog.discounts)} discounts | "
        f"{len(catalog.taxes)} taxes"
    )


# ============================================================================
# MAIN CONTENT
# ============================================================================
st.title("Product Price Preview")

col1, col2 = st.columns([1.2, 1.8], gap="large")

with col1:
    st.subheader("Pricing")

    with st.container(border=True):
        price_text = st.text_input("Price", value="", placeholder="0.00")

        promotion_ids = []
        if is_edit:
            promotion_labels = {p.id: p.name for p in catalog.promotions}
            promotion_ids = st.multiselect(
                "Promotions",
                options=list(promotion_labels),
                default=selection["promotion_ids"],
                format_func=lambda pid: promotion_labels[pid],
            )

        discount_labels = {"": "No discount", **{d.id: d.name for d in catalog.discounts}}
        discount_id = st.selectbox(
            "Discount",
            options=list(discount_labels),
            index=list(discount_labels).index(selection["discount_id"] or ""),
            format_func=lambda did: discount_labels[did],
        ) or None

        tax_labels = {t.id: t.name for t in catalog.taxes}
        tax_ids = st.multiselect(
            "Taxes",
            options=list(tax_labels),
            default=selection["tax_ids"],
            format_func=lambda tid: tax_labels[tid],
        )

if is_edit:
    price_input = edit_flow_input(price_text, product, catalog, promotion_ids, discount_id, tax_ids)
else:
    price_input = create_flow_input(price_text, catalog, discount_id, tax_ids)

result = cached_compute(price_input)

if is_edit:
    payload = update_payload(price_text, result, discount_id, tax_ids, promotion_ids)
else:
    payload = create_payload(price_text, result, discount_id, tax_ids)

with col2:
    st.subheader("Price Breakdown")

    with st.container(border=True):
        m1, m2 = st.columns(2)
        m1.metric("Base", f"${price_input.base_amount:,.2f}")
        m2.metric("Final Price", f"${result.final_total:,.2f}")

        st.divider()

        ledger = pd.DataFrame([{
            'Step': step.label,
            'Change': "" if step.kind in ("base", "total") else f"{step.delta:+,.2f}",
            'Running Total': f"${step.running_total:,.2f}",
            'Detail': step.detail or "",
        } for step in result.steps])

        st.dataframe(ledger, use_container_width=True, hide_index=True)

    with st.expander("📦 Payload to save"):
        st.json(payload)

    with st.expander("🔍 Trace"):
        st.code(result.get_trace_text(), language=None)
