"""quickbench - a minimal in-process micro-benchmark harness."""

from quickbench.harness.base import GroupContext, benchmark
from quickbench.version.quickbench_version import QUICKBENCH_VERSION, Version

__version__ = str(QUICKBENCH_VERSION)
__version_info__ = QUICKBENCH_VERSION

__all__ = [
    "QUICKBENCH_VERSION",
    "GroupContext",
    "Version",
    "__version__",
    "__version_info__",
    "benchmark",
]
