"""Gradio editor for Retouch: state, validation, handlers and layout."""
