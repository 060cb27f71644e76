"""Streamlit front end for the mage farming calculator."""
