"""Shared utilities for mjprompt."""
