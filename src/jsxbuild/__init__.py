# src/jsxbuild/__init__.py
"""Pre-compiles the JSX block embedded in a host HTML document."""

__version__ = "1.0.0"
