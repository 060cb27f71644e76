"""
Suggested Monsters Page
Monsters ranked by experience per hit for the current magic setup.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

import pandas as pd
import streamlit as st
from mage_farm.core import (
    MAX_SUGGESTED_MONSTERS,
    add_to_active_set,
    rank_candidates,
)
from utils.session import require_catalog_page, render_magic_setup_sidebar

st.set_page_config(page_title="Suggested Monsters", page_icon="🏆", layout="wide")

catalog = require_catalog_page()
settings = st.session_state.settings
render_magic_setup_sidebar(settings)

st.title("🏆 Suggested Monsters")
st.markdown(f"Top {MAX_SUGGESTED_MONSTERS} monsters by experience per hit.")

# Filters
col1, col2, col3, col4 = st.columns(4)
with col1:
    settings.herbs_only = st.checkbox("With herbs", value=settings.herbs_only)
with col2:
    settings.max_hits = st.number_input("Max hits", min_value=1, value=int(settings.max_hits))
with col3:
    settings.min_level = st.number_input("Min level", min_value=1, value=int(settings.min_level))
with col4:
    settings.max_level = st.number_input("Max level", min_value=1, value=int(settings.max_level))

ranked = rank_candidates(catalog, settings.get_attacker(), settings.get_ranking_filter())

st.divider()

if not ranked:
    st.info("No monsters match these filters.")
    st.stop()

table = pd.DataFrame([
    {
        "Monster": r.monster.name,
        "Level": r.monster.level,
        "Exp / hit": round(r.exp_per_hit, 2),
        "Hits": r.hits,
        "Damage": round(r.damage),
        "HP": round(r.hp),
        "M. Def": round(r.magic_defense),
        "Total Exp": round(r.exp),
    }
    for r in ranked
])
st.dataframe(table, hide_index=True, use_container_width=True)

st.subheader("Add to active set")
names = {r.monster.id: f"{r.monster.name} (Lv {r.monster.level})" for r in ranked}
to_add = st.multiselect("Monsters", list(names), format_func=lambda mid: names[mid])
if st.button("➕ Add selected") and to_add:
    entries = settings.get_active_entries()
    for monster_id in to_add:
        entries = add_to_active_set(entries, catalog.get_monster(monster_id))
    settings.set_active_entries(entries)
    st.success(f"Added {len(to_add)} monster(s)")
