from atomsframe.io.trajectory import iter_systems, read_system, write_systems

__all__ = ["read_system", "iter_systems", "write_systems"]
