"""Mermaid flowchart of endpoints grouped like the endpoint table."""

import re

from autodoc.generator.table import endpoint_groups
from autodoc.ir import EndpointData


def render_endpoint_map(endpoints: list[EndpointData]) -> str:
    grouped: dict[str, list[EndpointData]] = {}
    for ep, group in zip(endpoints, endpoint_groups(endpoints)):
        grouped.setdefault(group, []).append(ep)

    lines = ["flowchart TB"]
    used: set[str] = set()
    for name in sorted(grouped):
        lines.append(f"  subgraph {sanitize(name)}")
        lines.append("    direction TB")
        for ep in grouped[name]:
            label = f"{ep.method.value} {ep.path}"
            params = [
                f"{p.name}:{p.location.value}{' (req)' if p.required else ''}"
                for p in ep.parameters
            ]
            if params:
                label += "<br/>Params: " + ", ".join(params)
            node_id = _unique(sanitize(f"{ep.method.value}_{ep.path}"), used)
            lines.append(f'    {node_id}["{label.replace(chr(34), "#quot;")}"]')
        lines.append("  end")
        lines.append("")
    return "\n".join(lines) + "\n"


def sanitize(text: str) -> str:
    """Mermaid-safe identifier: non-word characters become single underscores."""
    return re.sub(r"_+", "_", re.sub(r"[^A-Za-z0-9_]", "_", text))


def _unique(node_id: str, used: set[str]) -> str:
    # distinct paths can sanitize to the same id, and Mermaid merges nodes by id
    candidate, n = node_id, 1
    while candidate in used:
        n += 1
        candidate = f"{node_id}_{n}"
    used.add(candidate)
    return candidate
