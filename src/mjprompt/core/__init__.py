"""
Core modules for mjprompt.

This package contains the core business logic for:
- Attribute axes (choice sets and the theme list)
- Algorithm/aspect compatibility
- The prompt configuration and its command compiler
- Persistence and the presenter-facing session
"""
