# src/crucible_kitchen/core/ports/interfaces.py
"""
Interfaces dos ports built-in do Crucible Kitchen.

Cada port é uma classe abstrata (`abc.ABC`) que declara o conjunto fixo
de operações que um adapter deve implementar. Adapters concretos
declaram conformidade **explicitamente**, herdando da interface (ou via
`Interface.register(...)`):

    class MeuTrainingClient(TrainingClient):
        def start_session(self, config): ...

O core nunca invoca estas operações: ele apenas verifica conformidade
antes da run. Quem chama as operações são os handlers de Stage.

Limites explícitos:
    - Não contém implementações concretas (backends, datasets, storage)
    - Não realiza I/O
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping, Optional


class TrainingClient(ABC):
    """Backend de treino (forward/backward, passo do otimizador, checkpoints)."""

    @abstractmethod
    def start_session(self, config: Mapping[str, Any]) -> Any:
        """Abre uma sessão de treino para o modelo descrito em `config`."""

    @abstractmethod
    def forward_backward(self, session: Any, batch: Any) -> Dict[str, float]:
        """Executa forward + backward em um batch e retorna as métricas do passo."""

    @abstractmethod
    def optim_step(self, session: Any, learning_rate: float) -> None:
        ...

    @abstractmethod
    def save_checkpoint(self, session: Any, name: str) -> str:
        """Persiste o estado da sessão e retorna a referência do checkpoint."""

    @abstractmethod
    def close_session(self, session: Any) -> None:
        ...


class DatasetStore(ABC):
    """Carregamento de datasets."""

    @abstractmethod
    def load_dataset(self, name: str, split: str) -> Any:
        ...

    @abstractmethod
    def get_batches(self, dataset: Any, batch_size: int) -> Iterable[Any]:
        ...

    @abstractmethod
    def dataset_size(self, dataset: Any) -> int:
        ...


class BlobStore(ABC):
    """Armazenamento de artefatos (checkpoints, pesos)."""

    @abstractmethod
    def put(self, key: str, data: bytes) -> str:
        ...

    @abstractmethod
    def get(self, key: str) -> bytes:
        ...

    @abstractmethod
    def exists(self, key: str) -> bool:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class HubClient(ABC):
    """Model hub (download e publicação de modelos)."""

    @abstractmethod
    def download(self, repo_id: str, revision: Optional[str]) -> str:
        ...

    @abstractmethod
    def upload(self, repo_id: str, path: str) -> str:
        ...

    @abstractmethod
    def list_files(self, repo_id: str) -> List[str]:
        ...


class MetricsStore(ABC):
    """Persistência de métricas de runs."""

    @abstractmethod
    def record(self, run_id: str, metric: Mapping[str, Any]) -> None:
        ...

    @abstractmethod
    def flush(self, run_id: str) -> None:
        ...

    @abstractmethod
    def query(self, run_id: str, name: str) -> List[Mapping[str, Any]]:
        ...
