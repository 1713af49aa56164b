"""Streamlit user interface for the record manager."""
