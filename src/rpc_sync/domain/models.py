from dataclasses import dataclass, field
from typing import Any

Catalog = dict[str, list[str]]


@dataclass(frozen=True)
class CandidateEntry:
    url: str
    tracking: str | None = None


@dataclass(frozen=True)
class NetworkCatalogEntry:
    network_id: str
    candidates: tuple[CandidateEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ProbeResult:
    url: str
    ok: bool
    block_number: str | None = None
    error: str | None = None
    elapsed_ms: int = 0


@dataclass(frozen=True)
class SyncSummary:
    networks_total: int
    candidates_total: int
    eligible_total: int
    verified_total: int
    primary_network_verified: int
    previous_version: int
    version: int
    output_path: str
    probed: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "networks_total": self.networks_total,
            "candidates_total": self.candidates_total,
            "eligible_total": self.eligible_total,
            "verified_total": self.verified_total,
            "primary_network_verified": self.primary_network_verified,
            "previous_version": self.previous_version,
            "version": self.version,
            "output_path": self.output_path,
            "probed": self.probed,
        }
