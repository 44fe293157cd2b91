# src/crucible_kitchen/core/ports/registry.py
"""
Registro estático de ports do Crucible Kitchen.

Este módulo mapeia nomes de capability (ports) para a interface que o
adapter vinculado deve satisfazer.

| Port              | Interface        | Propósito                               |
|-------------------|------------------|-----------------------------------------|
| `training_client` | `TrainingClient` | Backend de treino (forward/backward)    |
| `dataset_store`   | `DatasetStore`   | Carregamento de datasets                |
| `blob_store`      | `BlobStore`      | Artefatos (checkpoints, pesos)          |
| `hub_client`      | `HubClient`      | Model hub                               |
| `metrics_store`   | `MetricsStore`   | Persistência de métricas                |

Decisões arquiteturais:
    - A tabela é fixa e somente leitura (MappingProxyType)
    - Ports desconhecidos não são erro: são tratados como "não verificados",
      permitindo que colaboradores externos usem capabilities próprias

Invariantes:
    - Leituras concorrentes são seguras sem sincronização
"""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping, Optional

from .interfaces import BlobStore, DatasetStore, HubClient, MetricsStore, TrainingClient


TRAINING_CLIENT = "training_client"
DATASET_STORE = "dataset_store"
BLOB_STORE = "blob_store"
HUB_CLIENT = "hub_client"
METRICS_STORE = "metrics_store"


PORT_INTERFACES: Mapping[str, type] = MappingProxyType(
    {
        TRAINING_CLIENT: TrainingClient,
        DATASET_STORE: DatasetStore,
        BLOB_STORE: BlobStore,
        HUB_CLIENT: HubClient,
        METRICS_STORE: MetricsStore,
    }
)


def lookup_interface(port: str) -> Optional[type]:
    """Retorna a interface do port, ou `None` para ports não verificados."""
    return PORT_INTERFACES.get(port)


def known_ports() -> List[str]:
    return list(PORT_INTERFACES)
