from .ascii import render_ascii, status_line
from .snapshot import RenderSnapshot, snapshot

__all__ = ["render_ascii", "status_line", "RenderSnapshot", "snapshot"]
