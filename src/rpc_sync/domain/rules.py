from src.rpc_sync.domain.models import CandidateEntry, NetworkCatalogEntry

PRIMARY_NETWORK_ID = "1"
REQUIRED_URL_PREFIX = "https"
PRIMARY_NETWORK_TRACKING = "none"


def is_eligible(network_id: str, candidate: CandidateEntry) -> bool:
    if not candidate.url.startswith(REQUIRED_URL_PREFIX):
        return False
    # Mainnet only trusts endpoints that declare no tracking.
    if network_id == PRIMARY_NETWORK_ID:
        return candidate.tracking == PRIMARY_NETWORK_TRACKING
    return True


def eligible_urls(entry: NetworkCatalogEntry) -> tuple[str, ...]:
    return tuple(
        candidate.url
        for candidate in entry.candidates
        if is_eligible(entry.network_id, candidate)
    )
