"""Stage catalog, default style prefix and fixed closing block."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence


@dataclass(frozen=True)
class Stage:
    """One named step of the pipeline producing one part of the document."""

    name: str
    title: str
    template: str
    context_slice_bytes: Optional[int]
    kind: str = "text"


TITLE = Stage("title", "Title", "stages/title.j2", 3000)
DESCRIPTION = Stage("description", "Description", "stages/description.j2", 3000)
FEATURES = Stage("features", "Features", "stages/features.j2", 4000)
INSTALLATION = Stage("installation", "Installation", "stages/installation.j2", 4000)
USAGE = Stage("usage", "Usage", "stages/usage.j2", 4000)
ARCHITECTURE = Stage("architecture", "Architecture", "stages/architecture.j2", 4000, kind="diagram")
README = Stage("readme", "README", "stages/readme.j2", None)

INCREMENTAL_STAGES: tuple[Stage, ...] = (TITLE, DESCRIPTION, FEATURES, INSTALLATION, USAGE)
MONOLITHIC_STAGES: tuple[Stage, ...] = (README,)

# Stages that may be requested by name but are not part of the default catalog.
OPTIONAL_STAGES: tuple[Stage, ...] = (ARCHITECTURE,)

STAGES_BY_NAME: Dict[str, Stage] = {
    stage.name: stage for stage in INCREMENTAL_STAGES + OPTIONAL_STAGES
}


def select_stages(names: Sequence[str] | None = None) -> List[Stage]:
    """Return the incremental catalog, or the named stages in catalog order."""
    if not names:
        return list(INCREMENTAL_STAGES)
    requested = {name.strip().lower() for name in names if name.strip()}
    unknown = requested.difference(STAGES_BY_NAME)
    if unknown:
        raise ValueError(f"Unknown section(s): {', '.join(sorted(unknown))}")
    ordered = [stage for stage in INCREMENTAL_STAGES if stage.name in requested]
    ordered.extend(stage for stage in OPTIONAL_STAGES if stage.name in requested)
    return ordered


CLOSING_BLOCK = (
    "## Contributing\n\n"
    "Contributions are welcome! Please feel free to submit a Pull Request.\n\n"
    "## License\n\n"
    "This project is licensed under the MIT License - see the LICENSE file for details.\n"
)

DEFAULT_STYLE_PREFIX = """\
You are an expert technical writer specializing in README documentation for software projects. \
Analyze the provided source code and write professional README content that follows modern open-source conventions.

Core principles:
- Clarity first: every section should be immediately understandable.
- Action-oriented: focus on what users can do with the project.
- Professional tone: authoritative yet approachable, no marketing language.
- Grounded: never invent commands, flags, files or dependencies that the source does not show.

Analysis approach:
1. Identify the purpose from entry points (main files, CLI definitions) and manifests.
2. Map the technology stack from Cargo.toml, package.json, pyproject.toml or go.mod.
3. Understand the architecture from the module structure and key abstractions.
4. Extract usage examples from tests, examples and CLI definitions.

Formatting:
- Use a proper markdown heading hierarchy.
- Use fenced code blocks with a language hint for commands and code.
- Use tables for structured data such as configuration options.

Source code analysis:"""


__all__ = [
    "ARCHITECTURE",
    "CLOSING_BLOCK",
    "DEFAULT_STYLE_PREFIX",
    "DESCRIPTION",
    "FEATURES",
    "INCREMENTAL_STAGES",
    "INSTALLATION",
    "MONOLITHIC_STAGES",
    "OPTIONAL_STAGES",
    "README",
    "STAGES_BY_NAME",
    "Stage",
    "TITLE",
    "USAGE",
    "select_stages",
]
