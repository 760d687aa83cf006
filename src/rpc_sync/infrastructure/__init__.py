"""Infrastructure adapters for catalog synchronization."""

from src.rpc_sync.infrastructure.catalog_sink import JsonCatalogSink
from src.rpc_sync.infrastructure.registry_client import RegistryDocumentClient
from src.rpc_sync.infrastructure.rpc_prober import RpcEndpointProber
from src.rpc_sync.infrastructure.version_store import FileVersionStore

__all__ = ["FileVersionStore", "JsonCatalogSink", "RegistryDocumentClient", "RpcEndpointProber"]
