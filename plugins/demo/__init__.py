# plugins/demo/__init__.py
from __future__ import annotations

"""
Demo command group:
- nested names ('mode' / 'mode advanced', 'calc add' / 'calc div')
- typed arguments with width checks
- background output through the shared writer
"""

CATEGORY_DESCRIPTION = "Examples of nested commands, typed arguments and background output."
