"""Assembles the build plan from the configured components."""

from __future__ import annotations

import logging
from pathlib import Path

from buildwire.domain import (
    BuildPlan,
    CompileOptions,
    ModuleDefinition,
    ModulePlan,
    ProjectDefinition,
)
from buildwire.exceptions import ConfigurationError
from buildwire.layout import OutputPathRemapper
from buildwire.modules import ModuleGraph
from buildwire.resolution import ResolutionOverrideEngine
from buildwire.toolchain import compile_options
from buildwire.versions import VersionRegistry


class BuildPlanner:
    """Runs the configuration phase and produces a :class:`BuildPlan`.

    Errors propagate unchanged; there is no partial plan.
    """

    def __init__(
        self,
        project: ProjectDefinition,
        registry: VersionRegistry,
        graph: ModuleGraph,
        engine: ResolutionOverrideEngine,
        remapper: OutputPathRemapper,
        base_dir: Path,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._project = project
        self._registry = registry
        self._graph = graph
        self._engine = engine
        self._remapper = remapper
        self._base_dir = base_dir
        self._logger = logger or logging.getLogger(__name__)

    def plan(self) -> BuildPlan:
        order = self._graph.compute_order()
        levels = self._graph.compute_levels()
        self._logger.info("Evaluation order for %s: %s", self._project.name, " -> ".join(order))

        root = self._remapper.root_output_path(self._base_dir)
        self._logger.info("Root output directory: %s", root)

        options = compile_options(self._registry, self._project.toolchain.free_compiler_args)
        modules = []
        claimed: dict[Path, str] = {}
        for name in order:
            module_plan = self._plan_module(self._project.module(name), options)
            if module_plan.output_dir == root:
                msg = f"Output directory of module '{name}' is the shared root {root}"
                raise ConfigurationError(msg)
            owner = claimed.setdefault(module_plan.output_dir, name)
            if owner != name:
                msg = (
                    f"Modules '{owner}' and '{name}' share the output directory "
                    f"{module_plan.output_dir}"
                )
                raise ConfigurationError(msg)
            modules.append(module_plan)

        return BuildPlan(
            project=self._project.name,
            versions=dict(self._registry.snapshot()),
            repositories=self._project.repositories,
            order=order,
            levels=levels,
            root_output_dir=root,
            modules=tuple(modules),
        )

    def _plan_module(self, module: ModuleDefinition, options: CompileOptions) -> ModulePlan:
        output_dir = self._remapper.module_output_path(module.name, module.output_dir)
        graphs = self._engine.resolve_all(module)
        self._logger.debug(
            "Configured module %s: output=%s variants=%s",
            module.name,
            output_dir,
            ",".join(graph.variant for graph in graphs),
        )
        return ModulePlan(
            name=module.name,
            output_dir=output_dir,
            depends_on=self._graph.dependencies_of(module.name),
            namespace=module.namespace,
            application_id=module.application_id,
            plugins=module.plugins,
            compile_sdk=module.compile_sdk,
            min_sdk=module.min_sdk,
            target_sdk=module.target_sdk,
            ndk_version=module.ndk_version,
            version_code=module.version_code,
            version_name=module.version_name,
            multidex=module.multidex,
            desugaring=module.desugaring,
            compile_options=options,
            signing={variant.name: variant.signing for variant in module.variants},
            minify={variant.name: variant.minify for variant in module.variants},
            graphs=graphs,
        )


__all__ = ["BuildPlanner"]
