# plugins/builtin/__init__.py
from __future__ import annotations

CATEGORY_DESCRIPTION = "Shell built-ins (help, exit)."
