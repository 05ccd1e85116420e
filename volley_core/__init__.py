"""
volley_core package: rotation models, zone resolution, overlap checking, IO, editing and rendering.
"""
__all__ = [
    "constants",
    "models",
    "errors",
    "geometry",
    "zones",
    "overlap",
    "validation",
    "io",
    "editor",
    "court",
    "report",
    "export_pdf",
    "config",
    "logging_utils",
    "cli",
]
