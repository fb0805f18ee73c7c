"""Group registry: discovery and explicit registration of benchmark groups.

Usage:
    from quickbench.harness.registry import GroupRegistry

    # Discover groups from files, directories, or importable modules
    registry = GroupRegistry(search_paths=["benchmarks/"], modules=["mypkg.bench"])

    # Or declare a group explicitly
    lists = registry.group("lists")

    @lists.benchmark
    def append(ctx):
        ctx.result = ["hello"] * 1000

    # Get every group, in discovery order
    groups = registry.get_all_groups()

    # Get a specific group by name
    group = registry.get_group("ListBuilding")

Discovery order is deterministic: files in lexical order; within a module,
the module itself first, then its classes, builders and groups in definition
order; explicitly registered groups after everything discovered.
"""

import importlib
import importlib.util
import inspect
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

from quickbench.harness.base import (
    LOADED_MODULE_PREFIX,
    BenchmarkGroup,
    GroupBuilder,
    discover_group,
)
from quickbench.utils.logger import Logger

_LOG = "harness.registry"


class GroupRegistryError(Exception):
    """Base exception for registry errors."""

    pass


class GroupNameCollisionError(GroupRegistryError):
    """Raised when two different groups have the same name."""

    def __init__(self, name: str, source1: str | None, source2: str | None) -> None:
        self.name = name
        self.source1 = source1
        self.source2 = source2
        super().__init__(
            f"Group name collision: '{name}' is defined in both "
            f"{source1} and {source2}"
        )


class GroupNotFoundError(GroupRegistryError):
    """Raised when a requested group is not found."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Group not found: '{name}'")


def candidates_in_module(module: ModuleType) -> list[Any]:
    """Return the module and its group candidates, in definition order.

    Candidates are classes defined in the module plus module-level
    GroupBuilder and BenchmarkGroup objects.
    """
    candidates: list[Any] = [module]
    for value in vars(module).values():
        if inspect.isclass(value) and value.__module__ == module.__name__:
            candidates.append(value)
        elif isinstance(value, GroupBuilder | BenchmarkGroup):
            candidates.append(value)
    return candidates


class GroupRegistry:
    """Registry for discovery and management of benchmark groups.

    Raises GroupNameCollisionError if two different groups share a name.

    Example:
        >>> registry = GroupRegistry(search_paths=["examples/"])
        >>> for group in registry.get_all_groups():
        ...     print(group.name, [op.name for op in group.benchmarks])
    """

    def __init__(
        self,
        search_paths: list[str | Path] | None = None,
        modules: list[str | ModuleType] | None = None,
        lazy: bool = True,
    ) -> None:
        """Initialize the group registry.

        Args:
            search_paths: Files or directories of ``*.py`` files to scan.
            modules: Importable module names (or module objects) to scan.
            lazy: If True, defer discovery until first access.

        Raises:
            GroupNameCollisionError: If two groups have the same name.
        """
        self._groups: dict[str, BenchmarkGroup] = {}
        self._paths: list[Path] = [Path(p) for p in search_paths or []]
        self._modules: list[str | ModuleType] = list(modules or [])
        self._builders: list[GroupBuilder] = []
        self._explicit: list[BenchmarkGroup] = []
        self._discovered: bool = False

        if not lazy:
            self._ensure_discovered()

    def _ensure_discovered(self) -> None:
        """Ensure groups have been discovered."""
        if not self._discovered:
            self._discover_groups()
            self._discovered = True

    def _discover_groups(self) -> None:
        """Discover groups from paths, modules, and explicit registrations."""
        for path in self._paths:
            if not path.exists():
                Logger.warning_if_configured(_LOG, f"Search path not found: {path}")
                continue

            if path.is_file() and path.suffix == ".py":
                self._load_groups_from_file(path)
            elif path.is_dir():
                for py_file in sorted(path.glob("*.py")):
                    if py_file.name.startswith("_"):
                        continue
                    self._load_groups_from_file(py_file)

        for module in self._modules:
            self._load_groups_from_module(module)

        for builder in self._builders:
            built = builder.build()
            if built is not None:
                self._register_group(built)

        for group in self._explicit:
            self._register_group(group)

    def _load_groups_from_file(self, filepath: Path) -> None:
        """Load a Python file by location and scan it for groups."""
        module_name = f"{LOADED_MODULE_PREFIX}.{filepath.stem}"

        # Reuse an earlier load only if it came from this same file
        module = sys.modules.get(module_name)
        loaded_from = getattr(module, "__file__", None)
        if module is None or loaded_from is None or (
            Path(loaded_from).resolve() != filepath.resolve()
        ):
            try:
                spec = importlib.util.spec_from_file_location(module_name, filepath)
                if spec is None or spec.loader is None:
                    return
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception as e:
                # Skip files that can't be imported
                sys.modules.pop(module_name, None)
                Logger.warning_if_configured(
                    _LOG, f"Skipping {filepath}: import failed ({e})"
                )
                return

        self._scan_module(module)

    def _load_groups_from_module(self, module: str | ModuleType) -> None:
        """Import a module by name (if needed) and scan it for groups."""
        if isinstance(module, str):
            try:
                module = importlib.import_module(module)
            except Exception as e:
                Logger.warning_if_configured(
                    _LOG, f"Skipping module {module}: import failed ({e})"
                )
                return
        self._scan_module(module)

    def _scan_module(self, module: ModuleType) -> None:
        for candidate in candidates_in_module(module):
            group: BenchmarkGroup | None
            if isinstance(candidate, BenchmarkGroup):
                group = candidate if candidate.benchmarks else None
            elif isinstance(candidate, GroupBuilder):
                group = candidate.build()
            else:
                group = discover_group(candidate)
            if group is None:
                continue
            Logger.debug_if_configured(
                _LOG,
                f"Discovered group {group.name} with {len(group.benchmarks)} "
                f"benchmark(s), hooks: {', '.join(group.hooks) or 'none'}",
            )
            self._register_group(group)

    def _register_group(self, group: BenchmarkGroup) -> None:
        """Register a group, checking for name collisions."""
        existing = self._groups.get(group.name)
        if existing is None:
            self._groups[group.name] = group
        elif existing != group:
            raise GroupNameCollisionError(group.name, existing.source, group.source)

    # -------------------------------------------------------------------------
    # Explicit Registration
    # -------------------------------------------------------------------------

    def group(self, name: str) -> GroupBuilder:
        """Start declaring a group explicitly; see GroupBuilder."""
        builder = GroupBuilder(name)
        self._builders.append(builder)
        self._discovered = False
        self._groups.clear()
        return builder

    def register(self, group: BenchmarkGroup) -> None:
        """Register an already-built group."""
        self._explicit.append(group)
        self._discovered = False
        self._groups.clear()

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def get_all_groups(self) -> list[BenchmarkGroup]:
        """Get all registered groups in discovery order."""
        self._ensure_discovered()
        return list(self._groups.values())

    def get_group(self, name: str) -> BenchmarkGroup:
        """Get a specific group by name.

        Raises:
            GroupNotFoundError: If group is not found.
        """
        self._ensure_discovered()
        if name not in self._groups:
            raise GroupNotFoundError(name)
        return self._groups[name]

    def list_groups(self) -> list[dict[str, Any]]:
        """Get a summary of all registered groups.

        Returns:
            List of dicts with name, source, hooks and benchmarks.
        """
        self._ensure_discovered()
        return [
            {
                "name": group.name,
                "source": group.source,
                "hooks": group.hooks,
                "benchmarks": [op.name for op in group.benchmarks],
            }
            for group in self._groups.values()
        ]

    def __len__(self) -> int:
        """Return number of registered groups."""
        self._ensure_discovered()
        return len(self._groups)

    def __contains__(self, name: str) -> bool:
        """Check if a group is registered."""
        self._ensure_discovered()
        return name in self._groups
