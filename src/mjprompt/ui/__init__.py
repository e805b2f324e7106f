"""Gradio user interface for mjprompt."""
