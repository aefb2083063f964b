"""Service container wiring the configuration-phase components."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from buildwire.config import AppSettings
from buildwire.domain import BuildPlan, ProjectDefinition
from buildwire.layout import OutputPathRemapper
from buildwire.loader import load_project
from buildwire.modules import ModuleGraph
from buildwire.planner import BuildPlanner
from buildwire.resolution import OverrideRuleSet, ResolutionOverrideEngine
from buildwire.versions import VersionRegistry

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContainer:
    """Components built from one project definition, shared by reference."""

    settings: AppSettings
    project: ProjectDefinition
    version_registry: VersionRegistry
    override_rules: OverrideRuleSet
    module_graph: ModuleGraph
    output_paths: OutputPathRemapper
    resolution_engine: ResolutionOverrideEngine
    planner: BuildPlanner

    def plan(self) -> BuildPlan:
        return self.planner.plan()


def build_module_graph(project: ProjectDefinition) -> ModuleGraph:
    graph = ModuleGraph()
    for module in project.modules:
        graph.declare_module(module.name)
    for module in project.modules:
        for dependency in module.depends_on:
            graph.declare_depends_on(module.name, dependency)
    if project.all_modules_depend_on is not None:
        graph.declare_all_depend_on(project.all_modules_depend_on)
    return graph


def build_container(
    settings: AppSettings | None = None,
    project: ProjectDefinition | None = None,
) -> ServiceContainer:
    """Construct the primary service container."""

    resolved_settings = settings or AppSettings.from_env()
    resolved_project = project or load_project(resolved_settings.project_file)

    registry = VersionRegistry.from_mapping(resolved_project.versions)
    rules = OverrideRuleSet.from_declarations(resolved_project.overrides, registry)
    logger.debug("Registered %d override rules", len(rules))

    graph = build_module_graph(resolved_project)
    offset = resolved_project.build_dir_offset
    if offset is None:
        offset = resolved_settings.build_dir_offset
    remapper = OutputPathRemapper(offset=offset)
    engine = ResolutionOverrideEngine(rules, resolved_project.catalog)
    planner = BuildPlanner(
        resolved_project,
        registry,
        graph,
        engine,
        remapper,
        resolved_settings.base_dir,
    )

    return ServiceContainer(
        settings=resolved_settings,
        project=resolved_project,
        version_registry=registry,
        override_rules=rules,
        module_graph=graph,
        output_paths=remapper,
        resolution_engine=engine,
        planner=planner,
    )


__all__ = ["ServiceContainer", "build_container", "build_module_graph"]
