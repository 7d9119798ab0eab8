"""Post-processing of generated sections."""

from .cleanup import normalise_section, strip_code_fence
from .diagram import FallbackDiagram, detect_project_kind, extract_diagram, render_diagram_section

__all__ = [
    "FallbackDiagram",
    "detect_project_kind",
    "extract_diagram",
    "normalise_section",
    "render_diagram_section",
    "strip_code_fence",
]
