"""Shared helpers for the Streamlit pages: persistence, session state and charts."""
