"""ASCII architecture diagrams: extraction from completions and fallbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

_DIAGRAM_MARKERS = ("```ascii", "```text", "```")

_KIND_HINTS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("web", ("components/", "pages/", "public/", ".vue", ".svelte", ".tsx", ".jsx", "index.html")),
    ("api", ("routes/", "api/", "handlers/", "controllers/", "server.", "app.py")),
    ("cli", ("cli.", "cli/", "commands/", "main.rs", "__main__.py", "cmd/")),
    ("library", ("lib.rs", "__init__.py", "index.ts", "index.js", "setup.py", "pyproject.toml")),
)


def extract_diagram(response: str) -> str:
    """Return the body of the first ``ascii``/``text``/plain fence, else the trimmed response."""
    for marker in _DIAGRAM_MARKERS:
        start = response.find(marker)
        if start == -1:
            continue
        body_start = start + len(marker)
        end = response.find("```", body_start)
        if end == -1:
            continue
        body = response[body_start:end]
        # Drop the rest of the opening fence line (a language hint, if any).
        newline = body.find("\n")
        if newline != -1:
            body = body[newline + 1:]
        return body.strip("\n").rstrip()
    return response.strip()


def detect_project_kind(paths: Iterable[str]) -> str:
    """Guess the project shape from discovered relative paths."""
    lowered = [path.lower() for path in paths]
    for kind, hints in _KIND_HINTS:
        if any(hint in path for path in lowered for hint in hints):
            return kind
    return "generic"


def top_level_components(paths: Iterable[str], limit: int = 6) -> List[str]:
    """Return the first top-level directories, in discovery order."""
    components: List[str] = []
    for path in paths:
        if "/" not in path:
            continue
        head = path.split("/", 1)[0]
        if head not in components:
            components.append(head)
        if len(components) >= limit:
            break
    return components


_LAYERS = {
    "web": ("FRONTEND", "BACKEND", "DATA"),
    "api": ("CLIENTS", "SERVICE", "STORAGE"),
    "cli": ("INPUT", "ENGINE", "OUTPUT"),
    "library": ("PUBLIC API", "INTERNALS", "DEPENDENCIES"),
    "generic": ("INTERFACE", "CORE", "RESULTS"),
}


@dataclass(frozen=True)
class FallbackDiagram:
    """A static three-layer diagram used when the completion holds no usable drawing."""

    kind: str
    components: Sequence[str]

    @property
    def title(self) -> str:
        return f"{self.kind.title()} Architecture"

    def render(self) -> str:
        layers = _LAYERS.get(self.kind, _LAYERS["generic"])
        width = 16
        box = "+" + "-" * (width + 2) + "+"
        border = "     ".join([box] * len(layers))
        labels = " --> ".join(f"| {layer:<{width}} |" for layer in layers)
        lines = [border, labels, border]
        if self.components:
            lines.append("")
            lines.append(f"Components: {', '.join(self.components)}")
        return "\n".join(lines)


def render_diagram_section(title: str, response: str, fallback: FallbackDiagram | None = None) -> str:
    """Format a diagram completion as a markdown section with a ``text`` fence."""
    diagram = extract_diagram(response)
    caption = None
    if not diagram and fallback is not None:
        diagram = fallback.render()
        caption = fallback.title
    lines = [f"## {title}", "", "```text", diagram, "```"]
    if caption:
        lines.extend(["", f"*Diagram: {caption}*"])
    return "\n".join(lines)


__all__ = [
    "FallbackDiagram",
    "detect_project_kind",
    "extract_diagram",
    "render_diagram_section",
    "top_level_components",
]
