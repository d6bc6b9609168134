"""crudbench: time tiered CRUD workloads and report latency statistics."""

__version__ = "0.1.0"
