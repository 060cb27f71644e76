"""
Session helpers shared by the app and its pages: catalog loading, saved
settings and the Magic Setup sidebar.
"""
import os
import logging

import streamlit as st

from mage_farm.catalog_loader import load_catalog
from mage_farm.core import Catalog, CatalogLoadError, ShotMode
from utils.data_manager import FarmSettings, load_user_data, save_user_data

logger = logging.getLogger(__name__)

# Settings are stored per local user name (set MAGE_FARM_USER to switch profiles)
DEFAULT_USERNAME = os.environ.get("MAGE_FARM_USER", "local")

SHOT_OPTIONS = [mode.value for mode in ShotMode]


@st.cache_resource(show_spinner=False)
def get_catalog(_progress=None) -> Catalog:
    """Load the catalogs once per server process."""
    return load_catalog(progress=_progress)


def init_session_state():
    """Initialize session state variables."""
    if 'username' not in st.session_state:
        st.session_state.username = DEFAULT_USERNAME
    if 'settings' not in st.session_state:
        st.session_state.settings = load_user_data(st.session_state.username)
    if 'catalog' not in st.session_state:
        st.session_state.catalog = None
    if 'catalog_error' not in st.session_state:
        st.session_state.catalog_error = None


def ensure_catalog():
    """
    Load the catalogs with a progress bar on first use.
    Returns the Catalog, or None if loading failed.
    """
    if st.session_state.catalog is not None:
        return st.session_state.catalog

    bar = st.progress(0, text="Loading databases...")

    def on_progress(label: str, percent: float):
        bar.progress(min(100, int(percent)), text=label)

    try:
        st.session_state.catalog = get_catalog(on_progress)
        st.session_state.catalog_error = None
    except CatalogLoadError as e:
        logger.error(f"Catalog load failed: {e}")
        st.session_state.catalog_error = str(e)
    finally:
        bar.empty()

    return st.session_state.catalog


def require_catalog_page():
    """Stop the page when catalogs are unavailable."""
    init_session_state()
    catalog = ensure_catalog()
    if catalog is None:
        st.error(st.session_state.catalog_error or "Failed to load databases")
        st.stop()
    return catalog


def render_magic_setup_sidebar(settings: FarmSettings):
    """Magic Setup inputs in the sidebar, written straight into the settings."""
    with st.sidebar:
        st.markdown("### 🔮 Magic Setup")
        settings.matk = st.number_input("M. Atk", min_value=0.0, value=float(settings.matk), step=10.0)
        settings.skill_power = st.number_input("Skill Power", min_value=0.0,
                                               value=float(settings.skill_power), step=1.0)

        shot_index = SHOT_OPTIONS.index(settings.shot) if settings.shot in SHOT_OPTIONS else 0
        shot = st.radio(
            "Shot",
            SHOT_OPTIONS,
            index=shot_index,
            format_func=lambda v: ShotMode(v).label,
            horizontal=True,
        )
        settings.shot = shot

        settings.ss_price = st.number_input("Spiritshot price", min_value=0.0,
                                            value=float(settings.ss_price), step=1.0)
        settings.bss_price = st.number_input("Blessed Spiritshot price", min_value=0.0,
                                             value=float(settings.bss_price), step=1.0)

        st.divider()
        if st.button("💾 Save Settings"):
            if save_user_data(st.session_state.username, settings):
                st.success("Settings saved!")
            else:
                st.error("Failed to save")
