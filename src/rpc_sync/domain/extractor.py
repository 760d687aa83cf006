from typing import Any

from src.config.logger_config import logger
from src.rpc_sync.domain.errors import EntryMalformed, ParseError
from src.rpc_sync.domain.js_literal import parse_module
from src.rpc_sync.domain.models import CandidateEntry, NetworkCatalogEntry

RPCS_FIELD = "rpcs"


def extract_catalog(raw: str, export_name: str = "extraRpcs") -> dict[str, NetworkCatalogEntry]:
    bindings = parse_module(raw)
    if export_name not in bindings:
        raise ParseError(f"Document does not declare {export_name!r}")
    payload = bindings[export_name]
    if not isinstance(payload, dict):
        raise ParseError(f"{export_name!r} is not an object literal")

    catalog: dict[str, NetworkCatalogEntry] = {}
    skipped = 0
    for network_id, value in payload.items():
        try:
            catalog[network_id] = build_network_entry(network_id, value)
        except EntryMalformed as exc:
            skipped += 1
            logger.debug("Skip network {}: {}", network_id, exc)

    if skipped:
        logger.warning("Skipped {} malformed network entries", skipped)
    return catalog


def build_network_entry(network_id: str, value: Any) -> NetworkCatalogEntry:
    if not isinstance(value, dict):
        raise EntryMalformed("value is not an object")
    rpcs = value.get(RPCS_FIELD)
    if not isinstance(rpcs, list):
        raise EntryMalformed(f"missing {RPCS_FIELD!r} list")

    candidates: list[CandidateEntry] = []
    for item in rpcs:
        try:
            candidates.append(normalize_candidate(item))
        except EntryMalformed as exc:
            logger.debug("Drop candidate for network {}: {}", network_id, exc)
    return NetworkCatalogEntry(network_id=network_id, candidates=tuple(candidates))


def normalize_candidate(item: Any) -> CandidateEntry:
    if isinstance(item, str):
        return CandidateEntry(url=item)
    if isinstance(item, dict):
        url = item.get("url")
        if not isinstance(url, str):
            raise EntryMalformed("candidate object has no string 'url'")
        tracking = item.get("tracking")
        return CandidateEntry(url=url, tracking=tracking if isinstance(tracking, str) else None)
    raise EntryMalformed(f"unsupported candidate {item!r}")
