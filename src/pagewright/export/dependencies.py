"""Dependency analysis and ``package.json`` generation."""

import re
from dataclasses import dataclass, field
from typing import Any

from pagewright.core import safe_json_dumps
from pagewright.models import Project, RequestAction

NETWORK_APIS = frozenset({"wx.request", "wx.uploadFile", "wx.downloadFile", "wx.connectSocket"})

PROMISE_PACKAGE = ("miniprogram-api-promise", "^1.0.4")
DEV_DEPENDENCIES = {"miniprogram-api-typings": "^3.12.2"}


@dataclass
class Dependencies:
    npm: dict[str, str] = field(default_factory=dict)
    components: list[str] = field(default_factory=list)
    apis: list[str] = field(default_factory=list)
    plugins: dict[str, Any] = field(default_factory=dict)


def _project_actions(project: Project):
    for page in project.pages:
        for event in page.lifecycle_events:
            yield from event.actions
        for event in page.custom_events:
            yield from event.actions
        for node in page.walk():
            for component_event in node.events:
                yield from component_event.actions
    for definition in project.global_components:
        for event in definition.events:
            yield from event.actions
        for event in definition.lifecycle_events:
            yield from event.actions


def analyze_dependencies(project: Project) -> Dependencies:
    deps = Dependencies(plugins=dict(project.config.plugins))

    for definition in project.global_components:
        if definition.external:
            if definition.name not in deps.components:
                deps.components.append(definition.name)
            if definition.npm_package:
                deps.npm[definition.npm_package] = definition.version or "latest"

    for action in _project_actions(project):
        if isinstance(action, RequestAction) and action.url and "wx.request" not in deps.apis:
            deps.apis.append("wx.request")

    if any(api in NETWORK_APIS for api in deps.apis):
        name, version = PROMISE_PACKAGE
        deps.npm.setdefault(name, version)

    return deps


def sanitize_package_name(name: str) -> str:
    """Lowercase, non ``[a-z0-9-]`` runs to single hyphens, trimmed."""
    cleaned = re.sub(r"[^a-z0-9-]+", "-", name.lower())
    cleaned = re.sub(r"-+", "-", cleaned).strip("-")
    return cleaned or "miniprogram"


def generate_package_json(project: Project, deps: Dependencies | None = None) -> str:
    deps = deps or analyze_dependencies(project)
    config = {
        "name": sanitize_package_name(project.name),
        "version": project.version or "1.0.0",
        "description": project.description or f"{project.name} mini program",
        "dependencies": deps.npm,
        "devDependencies": DEV_DEPENDENCIES,
    }
    return safe_json_dumps(config, indent=2) + "\n"


__all__ = [
    "Dependencies",
    "analyze_dependencies",
    "sanitize_package_name",
    "generate_package_json",
]
