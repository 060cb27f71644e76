"""
Active Set Page
Weighted mix of monsters with expected adena, shot cost and item yield.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

import pandas as pd
import streamlit as st
from mage_farm.core import (
    aggregate_set,
    remove_from_active_set,
    total_active_rate,
    update_active_rate,
)
from utils.session import require_catalog_page, render_magic_setup_sidebar
from utils.yield_chart import create_item_yield_chart

st.set_page_config(page_title="Active Set", page_icon="🧮", layout="wide")

catalog = require_catalog_page()
settings = st.session_state.settings
render_magic_setup_sidebar(settings)

st.title("🧮 Active Set")

settings.session_size = st.number_input("Total monsters", min_value=0, value=int(settings.session_size))

entries = settings.get_active_entries()
if not entries:
    st.info("The active set is empty. Add monsters from Monster Search or Suggested Monsters.")
    st.stop()

# =============================================================================
# ENTRIES
# =============================================================================

total_rate = total_active_rate(entries)
st.caption(f"• Monsters: {len(entries)} • Total Rate: {total_rate:g}%")

for entry in entries:
    col1, col2, col3 = st.columns([4, 2, 1])
    with col1:
        st.markdown(entry.name or f"#{entry.monster_id}")
    with col2:
        rate = st.number_input(
            "Rate %", min_value=0.0, max_value=100.0, value=float(entry.rate),
            key=f"rate_{entry.monster_id}", label_visibility="collapsed",
        )
        if rate != entry.rate:
            entries = update_active_rate(entries, entry.monster_id, rate)
    with col3:
        if st.button("🗑️", key=f"remove_{entry.monster_id}"):
            entries = remove_from_active_set(entries, entry.monster_id)
            settings.set_active_entries(entries)
            st.rerun()

settings.set_active_entries(entries)

if total_active_rate(entries) != 100:
    st.warning("Warning: total rate should sum to 100%.")

st.divider()

# =============================================================================
# AGGREGATED STATS
# =============================================================================

summary = aggregate_set(entries, catalog, settings.get_attacker(), settings.session_size)

if summary.skipped_monster_ids:
    st.caption(f"Skipped unknown monsters: {', '.join(summary.skipped_monster_ids)}")

st.subheader("Aggregated Stats")
cols = st.columns(3)
with cols[0]:
    st.metric("Adena / kill", f"{summary.currency_per_kill:,.3f}")
    st.metric("Adena / set", f"{summary.gross_currency_for_set:,.0f}")
with cols[1]:
    st.metric("Shot cost / kill", f"{summary.shot_cost_per_kill:,.3f}")
    st.metric("Shot cost / set", f"{summary.shot_cost_for_set:,.0f}")
with cols[2]:
    st.metric("Net adena / kill", f"{summary.net_currency_per_kill:,.3f}")
    st.metric("Net adena / set", f"{summary.net_currency_for_set:,.0f}")

if summary.net_currency_per_kill < 0:
    st.error("Shots cost more than the adena this set drops.")

st.subheader("Expected Items")
if not summary.items:
    st.info("No item drops besides adena.")
    st.stop()

items_table = pd.DataFrame([
    {
        "Item": it.name,
        "Share %": round(it.percent, 2),
        "Qty / kill": round(it.qty_per_kill, 4),
        "Qty / set": round(it.qty_for_set, 3),
    }
    for it in summary.items
])
st.dataframe(items_table, hide_index=True, use_container_width=True)

fig = create_item_yield_chart(summary.items, settings.session_size)
st.plotly_chart(fig, use_container_width=True)
