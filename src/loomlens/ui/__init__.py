"""Gradio web interface for Loom Lens."""
