from .utils import (
    build_outline,
    escape_label,
    format_link,
    is_unloaded,
    level_prefix,
    render_outline,
    serialize,
)

__all__ = [
    "level_prefix",
    "escape_label",
    "format_link",
    "is_unloaded",
    "build_outline",
    "render_outline",
    "serialize",
]
