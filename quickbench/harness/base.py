"""Benchmark tag, group types, and group discovery.

A group is any class or module that exposes ``@benchmark``-tagged callables
invocable without an instance, plus optional lifecycle hooks matched by name
and parameter shape:

    init(argv)   once per group, before any benchmark
    reset()      before every benchmark invocation
    check()      after every benchmark invocation, outside the timed window

Example:
    >>> class ListBuilding:
    ...     result = None
    ...
    ...     @staticmethod
    ...     def check():
    ...         assert ListBuilding.result
    ...
    ...     @benchmark
    ...     @staticmethod
    ...     def append():
    ...         ListBuilding.result = [0] * 1000
    >>> group = discover_group(ListBuilding)
    >>> [op.name for op in group.benchmarks]
    ['append']
"""

import inspect
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from functools import partial
from types import ModuleType, SimpleNamespace
from typing import Any

BENCHMARK_TAG = "__quickbench_benchmark__"

# Package under which modules loaded by file path are registered
LOADED_MODULE_PREFIX = "quickbench_groups"

INIT_HOOK = "init"
RESET_HOOK = "reset"
CHECK_HOOK = "check"

# Parameter count each hook must accept exactly
HOOK_ARITY: dict[str, int] = {INIT_HOOK: 1, RESET_HOOK: 0, CHECK_HOOK: 0}


class HarnessError(Exception):
    """Base exception for harness errors."""

    pass


class HookShapeError(HarnessError, TypeError):
    """Raised when an explicitly registered callable has the wrong parameters."""

    def __init__(self, group: str, role: str, func: Callable[..., Any]) -> None:
        self.group = group
        self.role = role
        name = getattr(func, "__qualname__", repr(func))
        super().__init__(f"Group '{group}': {name} has the wrong shape for a {role}")


def benchmark(func: Any) -> Any:
    """Tag a callable as a benchmark operation.

    Works above or below ``@staticmethod``/``@classmethod``. The callable is
    returned unchanged; the tag only makes it visible to discovery.
    """
    target = func.__func__ if isinstance(func, staticmethod | classmethod) else func
    setattr(target, BENCHMARK_TAG, True)
    return func


def is_benchmark(func: Any) -> bool:
    """Return True if the callable carries the benchmark tag."""
    target = func.__func__ if isinstance(func, staticmethod | classmethod) else func
    return bool(getattr(target, BENCHMARK_TAG, False))


def accepts_exactly(func: Callable[..., Any], count: int) -> bool:
    """Check that a callable takes exactly ``count`` positional parameters.

    Defaults still count as parameters; ``*args``, ``**kwargs`` and
    keyword-only parameters never match.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False

    positional = (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    )
    params = list(signature.parameters.values())
    return len(params) == count and all(p.kind in positional for p in params)


class GroupContext(SimpleNamespace):
    """Mutable per-group state handed to builder-registered callables.

    Benchmarks stash results on it for the check hook to inspect.
    """


@dataclass(frozen=True)
class BenchmarkOperation:
    """A named zero-argument callable to be timed."""

    name: str
    func: Callable[[], Any]


@dataclass(frozen=True)
class BenchmarkGroup:
    """A discovered group: its benchmarks and optional lifecycle hooks."""

    name: str
    benchmarks: tuple[BenchmarkOperation, ...]
    init: Callable[[Sequence[str]], Any] | None = None
    reset: Callable[[], Any] | None = None
    check: Callable[[], Any] | None = None
    source: str | None = field(default=None, compare=False)

    @property
    def hooks(self) -> list[str]:
        """Names of the hooks this group declares."""
        return [
            hook
            for hook in (INIT_HOOK, RESET_HOOK, CHECK_HOOK)
            if getattr(self, hook) is not None
        ]


# -----------------------------------------------------------------------------
# Discovery
# -----------------------------------------------------------------------------


def _group_scoped_members(obj: type | ModuleType) -> Iterator[tuple[str, Any, Any]]:
    """Yield (name, raw, callable) for members invocable without an instance.

    Classes contribute their own staticmethods and classmethods in definition
    order. Modules contribute functions defined in that module.
    """
    if inspect.isclass(obj):
        for name, raw in vars(obj).items():
            if isinstance(raw, staticmethod | classmethod):
                yield name, raw, getattr(obj, name)
    else:
        for name, value in vars(obj).items():
            if inspect.isfunction(value) and value.__module__ == obj.__name__:
                yield name, value, value


def group_name(obj: type | ModuleType) -> str:
    """Class name, or module name; modules loaded by path use their file stem."""
    prefix, _, stem = obj.__name__.rpartition(".")
    if inspect.ismodule(obj) and prefix == LOADED_MODULE_PREFIX:
        return stem
    return obj.__name__


def discover_group(obj: type | ModuleType) -> BenchmarkGroup | None:
    """Inspect a class or module and build its group.

    Returns None when it has no benchmark operations, so it is excluded
    from the run entirely.
    """
    hooks: dict[str, Callable[..., Any]] = {}
    benchmarks: list[BenchmarkOperation] = []

    for name, raw, func in _group_scoped_members(obj):
        if name in HOOK_ARITY:
            if accepts_exactly(func, HOOK_ARITY[name]):
                hooks[name] = func
            continue
        if is_benchmark(raw) and accepts_exactly(func, 0):
            benchmarks.append(BenchmarkOperation(name=name, func=func))

    if not benchmarks:
        return None

    source = obj.__module__ if inspect.isclass(obj) else obj.__name__
    return BenchmarkGroup(
        name=group_name(obj),
        benchmarks=tuple(benchmarks),
        init=hooks.get(INIT_HOOK),
        reset=hooks.get(RESET_HOOK),
        check=hooks.get(CHECK_HOOK),
        source=source,
    )


# -----------------------------------------------------------------------------
# Explicit registration
# -----------------------------------------------------------------------------


class GroupBuilder:
    """Declare a group explicitly instead of relying on discovery.

    Every callable takes the group's GroupContext as its first parameter; the
    builder binds it so the runner sees the standard hook shapes.

    Example:
        >>> lists = GroupBuilder("lists")
        >>> @lists.init
        ... def init(ctx, argv):
        ...     ctx.count = int(argv[0]) if argv else 1000
        >>> @lists.benchmark
        ... def simple(ctx):
        ...     ctx.result = ["hello"] * ctx.count
        >>> lists.build().name
        'lists'
    """

    def __init__(self, name: str, context: GroupContext | None = None) -> None:
        self.name = name
        self.context = context if context is not None else GroupContext()
        self._hooks: dict[str, Callable[..., Any]] = {}
        self._benchmarks: list[BenchmarkOperation] = []

    def _bind(self, role: str, func: Callable[..., Any], arity: int) -> Callable[..., Any]:
        if not accepts_exactly(func, arity + 1):
            raise HookShapeError(self.name, role, func)
        return partial(func, self.context)

    def init(self, func: Callable[..., Any]) -> Callable[..., Any]:
        self._hooks[INIT_HOOK] = self._bind("init hook", func, 1)
        return func

    def reset(self, func: Callable[..., Any]) -> Callable[..., Any]:
        self._hooks[RESET_HOOK] = self._bind("reset hook", func, 0)
        return func

    def check(self, func: Callable[..., Any]) -> Callable[..., Any]:
        self._hooks[CHECK_HOOK] = self._bind("check hook", func, 0)
        return func

    def benchmark(self, func: Callable[..., Any]) -> Callable[..., Any]:
        bound = self._bind("benchmark", func, 0)
        self._benchmarks.append(BenchmarkOperation(name=func.__name__, func=bound))
        return func

    def build(self) -> BenchmarkGroup | None:
        """Freeze the declared group; None if it has no benchmarks."""
        if not self._benchmarks:
            return None
        return BenchmarkGroup(
            name=self.name,
            benchmarks=tuple(self._benchmarks),
            init=self._hooks.get(INIT_HOOK),
            reset=self._hooks.get(RESET_HOOK),
            check=self._hooks.get(CHECK_HOOK),
            source="<registered>",
        )
