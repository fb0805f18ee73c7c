from quickbench.version.quickbench_version import QUICKBENCH_VERSION, Version

__all__ = ["QUICKBENCH_VERSION", "Version"]
