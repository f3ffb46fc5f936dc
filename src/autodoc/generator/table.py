"""Markdown tables of endpoints and models."""

from autodoc.ir import EndpointData, ModelData

DEFAULT_GROUP = "Default"


def path_segments(path: str) -> list[str]:
    return [s for s in path.split("/") if s]


def common_prefix(paths: list[list[str]]) -> list[str]:
    """Longest run of leading segments shared by every path."""
    if not paths:
        return []
    prefix = paths[0]
    for parts in paths[1:]:
        length = 0
        while length < min(len(prefix), len(parts)) and prefix[length] == parts[length]:
            length += 1
        prefix = prefix[:length]
    return prefix


def endpoint_groups(endpoints: list[EndpointData]) -> list[str]:
    """Group name per endpoint: its first tag, else the first path segment
    after the prefix shared by all endpoints, else ``Default``."""
    segments = [path_segments(ep.path) for ep in endpoints]
    common = common_prefix(segments)

    groups = []
    for ep, parts in zip(endpoints, segments):
        if ep.tags and ep.tags[0]:
            groups.append(ep.tags[0])
        elif len(parts) > len(common):
            segment = parts[len(common)]
            groups.append(segment[:1].upper() + segment[1:])
        else:
            groups.append(DEFAULT_GROUP)
    return groups


def render_endpoint_table(endpoints: list[EndpointData]) -> str:
    rows = []
    for ep, group in zip(endpoints, endpoint_groups(endpoints)):
        params = ", ".join(
            f"{p.name} ({p.location.value}{', required' if p.required else ''})"
            for p in ep.parameters
        )
        rows.append((group, ep.method.value, ep.path, params, ep.summary))
    rows.sort(key=lambda r: (r[0], r[2]))

    lines = [
        "| Controller | Method | Path | Params | Description |",
        "|------------|--------|------|--------|-------------|",
    ]
    for controller, method, path, params, summary in rows:
        lines.append(
            f"| {_cell(controller)} | {_cell(method)} | `{path or '-'}` "
            f"| {_cell(params)} | {_cell(summary)} |"
        )
    return "\n".join(lines) + "\n"


def render_model_table(models: list[ModelData]) -> str:
    sections = []
    for model in sorted(models, key=lambda m: m.name):
        lines = [
            f"### {model.name or '-'}",
            "",
            f"_Description_: {_cell(model.description)}",
            "",
            "| Field | Type | Required | Description |",
            "|-------|------|----------|-------------|",
        ]
        if not model.fields:
            lines.append("| - | - | - | - |")
        for field in model.fields:
            type_name = str(field.type_ref) if field.type_ref is not None else ""
            lines.append(
                f"| {_cell(field.name)} | {_cell(type_name)} "
                f"| {'yes' if field.required else 'no'} | {_cell(field.description)} |"
            )
        sections.append("\n".join(lines) + "\n")
    return "\n".join(sections)


def _cell(text: str) -> str:
    text = " ".join(text.split()).replace("|", "\\|")
    return text or "-"
