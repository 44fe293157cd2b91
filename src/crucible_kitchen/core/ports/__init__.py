# src/crucible_kitchen/core/ports/__init__.py
"""
# Ports — Crucible Kitchen

Ports definem os contratos que implementações de adapters devem cumprir.
Este pacote reúne as interfaces built-in, o registro estático de ports e a
lógica de resolução e validação de adapters.

## Componentes

- **interfaces**: `TrainingClient`, `DatasetStore`, `BlobStore`, `HubClient`, `MetricsStore`
- **registry**: `lookup_interface`, `known_ports`
- **resolver**: `AdapterBinding`, `resolve`, `resolve_or_fail`, `validate`,
  `implements`, `missing_operations`
"""

from .interfaces import BlobStore, DatasetStore, HubClient, MetricsStore, TrainingClient
from .registry import (
    BLOB_STORE,
    DATASET_STORE,
    HUB_CLIENT,
    METRICS_STORE,
    TRAINING_CLIENT,
    known_ports,
    lookup_interface,
)
from .resolver import (
    AdapterBinding,
    implements,
    interface_operations,
    missing_operations,
    resolve,
    resolve_or_fail,
    validate,
)

__all__ = [
    "AdapterBinding",
    "BLOB_STORE",
    "BlobStore",
    "DATASET_STORE",
    "DatasetStore",
    "HUB_CLIENT",
    "HubClient",
    "METRICS_STORE",
    "MetricsStore",
    "TRAINING_CLIENT",
    "TrainingClient",
    "implements",
    "interface_operations",
    "known_ports",
    "lookup_interface",
    "missing_operations",
    "resolve",
    "resolve_or_fail",
    "validate",
]
