"""Properties taking parameterized and optional values."""

from __future__ import annotations

from typing import Optional


class Host:
    """A machine in the cluster."""


class ClusterBuilder:
    """Target cluster of the benchmark."""

    def hosts(self, hosts: list[Host]) -> ClusterBuilder:
        """Hosts of the cluster."""
        return self

    def primary(self, host: Optional[Host]) -> ClusterBuilder:
        """Host receiving writes."""
        return self

    def backup(self, host: Host | None) -> ClusterBuilder:
        """Host taking over on failure."""
        return self

    def name(self, name: str) -> ClusterBuilder:
        """Cluster name."""
        return self
