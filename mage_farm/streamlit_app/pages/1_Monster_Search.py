"""
Monster Search Page
Look up a monster: damage, hits to kill, shot cost and resolved drops.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

import math
import pandas as pd
import streamlit as st
from mage_farm.core import (
    add_to_active_set,
    monster_detail,
)
from utils.session import require_catalog_page, render_magic_setup_sidebar

st.set_page_config(page_title="Monster Search", page_icon="🔍", layout="wide")

catalog = require_catalog_page()
settings = st.session_state.settings
render_magic_setup_sidebar(settings)
attacker = settings.get_attacker()

st.title("🔍 Monster Search")

query = st.text_input("Search NPC", placeholder="Type a monster name...")
matches = catalog.search(query)

if not matches:
    st.info("No monsters match that name.")
    st.stop()

ids = [m.id for m in matches]
default_index = ids.index(settings.selected_monster_id) if settings.selected_monster_id in ids else 0
selected_id = st.selectbox(
    "Results",
    ids,
    index=default_index,
    format_func=lambda mid: f"{catalog.get_monster(mid).name} (Lv {catalog.get_monster(mid).level})",
)
settings.selected_monster_id = selected_id
monster = catalog.get_monster(selected_id)
detail = monster_detail(catalog, monster, attacker)

st.divider()

# =============================================================================
# NPC DETAILS
# =============================================================================

header_col, button_col = st.columns([4, 1])
with header_col:
    st.subheader(f"{monster.name} (Lv {monster.level})")
with button_col:
    if st.button("➕ Add to set", use_container_width=True):
        settings.set_active_entries(add_to_active_set(settings.get_active_entries(), monster))
        st.success("Added to active set")

combat = detail.combat
hits_text = f"{combat.hits_to_kill}" if math.isfinite(combat.hits_to_kill) else "∞"

cols = st.columns(5)
with cols[0]:
    st.metric("HP", f"{combat.hp:,.0f}")
with cols[1]:
    st.metric("M. Def", f"{combat.magic_defense:,.0f}")
with cols[2]:
    st.metric("Damage", f"{combat.damage:,.0f}")
with cols[3]:
    st.metric("Hits to kill", hits_text)
with cols[4]:
    st.metric("Exp", f"{detail.exp:,.0f}")

st.caption(f"Per kill shot cost: {detail.shot_cost_per_kill:,.0f} adena")

# =============================================================================
# DROPS
# =============================================================================

st.subheader("Drops")
if detail.drops:
    drops_table = pd.DataFrame([
        {
            "Item": d.name,
            "Qty": f"{d.min:g}" if d.min == d.max else f"{d.min:g}–{d.max:g}",
            "Chance": f"{d.p_group * 100:.3f}% × {d.p_item * 100:.3f}%",
            "Expected / kill": round(d.expected_quantity, 4),
        }
        for d in detail.drops
    ])
    st.dataframe(drops_table, hide_index=True, use_container_width=True)
else:
    st.info("No drops.")

# =============================================================================
# DERIVED STATS
# =============================================================================

with st.expander("Derived stats"):
    profile = detail.profile
    stat_rows = [
        {"Stat": "P. Atk", "Value": profile.physical_attack},
        {"Stat": "P. Def", "Value": profile.physical_defense},
        {"Stat": "M. Atk", "Value": profile.magic_attack},
        {"Stat": "M. Def (formula)", "Value": profile.magic_defense},
        {"Stat": "Atk. Spd", "Value": profile.attack_speed},
        {"Stat": "Cast Spd", "Value": profile.cast_speed},
        {"Stat": "Critical", "Value": profile.critical},
        {"Stat": "Evasion", "Value": profile.evasion},
        {"Stat": "Accuracy", "Value": profile.accuracy},
        {"Stat": "Walk Speed", "Value": profile.walk_speed},
        {"Stat": "Run Speed", "Value": profile.run_speed},
        {"Stat": "HP Regen", "Value": round(profile.hp_regen, 2)},
        {"Stat": "Max HP bonus", "Value": f"x{profile.hp_max_bonus:.2f}"},
        {"Stat": "Max MP bonus", "Value": f"x{profile.mp_max_bonus:.2f}"},
        {"Stat": "HP Rate", "Value": detail.hp_rate if detail.hp_rate >= 0 else "-"},
    ]
    st.dataframe(pd.DataFrame(stat_rows).astype({"Value": str}), hide_index=True, use_container_width=True)

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Strengths**")
        for skill in detail.strengths:
            st.markdown(f"- Skill {skill.skill_id} (Lv {skill.level})")
        if not detail.strengths:
            st.caption("None")
    with col2:
        st.markdown("**Weaknesses**")
        for skill in detail.weaknesses:
            st.markdown(f"- Skill {skill.skill_id} (Lv {skill.level})")
        if not detail.weaknesses:
            st.caption("None")

if monster.locations:
    with st.expander("Locations"):
        for loc in monster.locations:
            st.markdown(f"- {loc.name or loc.id}")
