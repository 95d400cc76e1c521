"""Append-only event log for drivers that evolve genomes."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from .genome import Genome


class EventLogger:
    """Append-only text logger with ISO timestamps."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self._path.open("a", encoding="utf-8")

    def __enter__(self) -> EventLogger:
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> None:
        self.close()

    def log(self, message: str) -> None:
        """Append a timestamped message to the log."""
        timestamp = datetime.now(timezone.utc).isoformat()
        self._handle.write(f"{timestamp} {message}\n")
        self._handle.flush()

    def log_genome(self, label: str, genome: Genome) -> None:
        """Record the shape of ``genome`` under ``label``."""
        nodes = sum(1 for _ in genome.get_nodes())
        connections = sum(1 for _ in genome.get_connections())
        enabled = sum(1 for _ in genome.get_enabled_connections())
        self.log(
            f"{label}: nodes={nodes} connections={connections} enabled={enabled}"
        )

    def log_rejection(self, genome: Genome, error: Exception) -> None:
        """Record that ``genome`` was discarded because of ``error``."""
        self.log(
            f"discarded genome with {len(genome)} genes: "
            f"{type(error).__name__}: {error}"
        )

    def close(self) -> None:
        """Close the underlying file handle."""
        if not self._handle.closed:
            self._handle.close()

    @property
    def path(self) -> Path:
        """Return the backing log path."""
        return self._path


__all__ = ["EventLogger"]
