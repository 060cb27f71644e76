"""
Mage Farm Helper - Streamlit Web App
Main entry point: loads the NPC/item databases and shows the magic setup.
"""
import os
import sys
import logging
from pathlib import Path

# Make the mage_farm package importable when run with `streamlit run`
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import streamlit as st
from utils.session import (
    init_session_state,
    ensure_catalog,
    render_magic_setup_sidebar,
)
from utils.data_manager import export_user_data_csv, import_user_data_csv
from mage_farm.catalog_loader import load_catalog_from_strings
from mage_farm.core import CatalogLoadError

logging.basicConfig(
    level=os.environ.get("MAGE_FARM_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Page config
st.set_page_config(
    page_title="L2 Mage Farm Helper",
    page_icon="🔮",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main-title {
        font-size: 2.2em;
        font-weight: bold;
        margin-bottom: 10px;
    }
    .sub-title {
        color: #888;
        margin-bottom: 30px;
    }
</style>
""", unsafe_allow_html=True)


def main_app():
    """Display main page after the databases are loaded."""
    settings = st.session_state.settings
    catalog = st.session_state.catalog

    render_magic_setup_sidebar(settings)

    st.markdown('<div class="main-title">🔮 L2 Mage Farm Helper</div>', unsafe_allow_html=True)
    st.markdown('<div class="sub-title">Find the best monsters to farm and what they are worth</div>',
                unsafe_allow_html=True)

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Monsters", f"{len(catalog.monsters):,}")
    with col2:
        st.metric("Items", f"{len(catalog.items):,}")
    with col3:
        st.metric("M. Atk", f"{settings.matk:,.0f}")
    with col4:
        st.metric("Active Set", len(settings.active_set))

    st.divider()

    st.markdown("### Welcome!")
    st.markdown("""
    Use the **sidebar navigation** to access different sections:

    - **Monster Search** - Look up a monster, its damage, hits to kill and drops
    - **Suggested Monsters** - Monsters ranked by experience per hit
    - **Active Set** - Mix monsters and see expected adena, shot cost and items

    Settings are saved with the **Save Settings** button in the sidebar.
    """)

    st.divider()
    st.markdown("### Import / Export")
    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            "⬇️ Export settings",
            data=export_user_data_csv(settings),
            file_name=f"{st.session_state.username}_farm.csv",
            mime="text/csv",
        )
    with col2:
        uploaded = st.file_uploader("Import settings", type=["csv"])
        if uploaded is not None and st.button("Import"):
            imported = import_user_data_csv(uploaded.getvalue().decode("utf-8"), st.session_state.username)
            if imported is None:
                st.error("Could not read that file")
            else:
                st.session_state.settings = imported
                st.success("Settings imported!")
                st.rerun()


def render_catalog_upload():
    """Build the catalog from uploaded npcs.json / items.json for this session."""
    col1, col2 = st.columns(2)
    with col1:
        npcs_file = st.file_uploader("npcs.json", type=["json"])
    with col2:
        items_file = st.file_uploader("items.json", type=["json"])

    if npcs_file is None or items_file is None:
        return

    if st.button("Load uploaded databases"):
        try:
            st.session_state.catalog = load_catalog_from_strings(
                npcs_file.getvalue().decode("utf-8"),
                items_file.getvalue().decode("utf-8"),
            )
        except (CatalogLoadError, UnicodeDecodeError) as e:
            logger.error(f"Uploaded catalog rejected: {e}")
            st.error(f"Could not read the uploaded files: {e}")
            return
        st.session_state.catalog_error = None
        st.rerun()


def main():
    """Main entry point."""
    init_session_state()

    if ensure_catalog() is None:
        st.markdown('<div class="main-title">🔮 L2 Mage Farm Helper</div>', unsafe_allow_html=True)
        st.error(st.session_state.catalog_error or "Failed to load databases")
        st.info("Place npcs.json and items.json in the data directory (or set MAGE_FARM_DATA_DIR), "
                "or upload them below.")
        render_catalog_upload()
        return

    main_app()


if __name__ == "__main__":
    main()
