# src/crucible_kitchen/recipes/supervised_finetuning.py
"""
Recipe de supervised fine-tuning (SFT).

Recipe padrão para fine-tuning de instruction following: treina um modelo
em pares entrada/saída usando next-token prediction.

Quando usar:
    - Fine-tuning de um modelo base com dados de instrução
    - Adaptação de um modelo a um domínio específico
    - Criação de um assistente para uma tarefa específica

Fluxo de treino:
    1. Carregar e pré-processar o dataset
    2. Inicializar a sessão de treino com o modelo
    3. Para cada época:
        - treinar nos batches
        - avaliar no split de validação
        - salvar checkpoint
    4. Finalizar

Exemplo:

    adapters = {
        "training_client": (TinkexTrainingClient, {"api_key": "..."}),
        "dataset_store": LocalDatasetStore,
    }

    result = kitchen.run(
        "supervised_finetuning",
        {"model": "meta-llama/Llama-2-7b", "dataset": "my_instructions", "epochs": 3},
        adapters=adapters,
    )
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from crucible_kitchen.core.exceptions import InvalidConfig
from crucible_kitchen.core.pipeline.context import Context
from crucible_kitchen.core.pipeline.workflow import Loop, Stage, Step
from crucible_kitchen.core.ports.registry import (
    BLOB_STORE,
    DATASET_STORE,
    HUB_CLIENT,
    METRICS_STORE,
    TRAINING_CLIENT,
)
from crucible_kitchen.core.recipe.recipe import Recipe
from crucible_kitchen.stages.noop import Noop


class SupervisedFineTuning(Recipe):

    def name(self) -> str:
        return "supervised_finetuning"

    def description(self) -> str:
        return "Supervised fine-tuning for instruction-following models using next-token prediction"

    def default_config(self) -> Dict[str, Any]:
        return {
            # obrigatórios
            "model": None,
            "dataset": None,
            # treino
            "epochs": 1,
            "batch_size": 4,
            "learning_rate": 2.0e-5,
            "warmup_steps": 100,
            "max_steps": None,
            "gradient_accumulation_steps": 1,
            # LoRA
            "lora_rank": 16,
            "lora_alpha": 32,
            "lora_dropout": 0.05,
            # avaliação
            "eval_split": "validation",
            "eval_every_n_steps": 100,
            # checkpoints
            "checkpoint_every_n_steps": 500,
            "save_best_only": True,
        }

    def required_adapters(self) -> List[str]:
        return [TRAINING_CLIENT, DATASET_STORE]

    def optional_adapters(self) -> List[str]:
        return [METRICS_STORE, BLOB_STORE, HUB_CLIENT]

    def workflow(self) -> List[Step]:
        return [
            Stage("load_dataset", Noop),
            Stage("init_session", Noop),
            Loop(
                "training",
                over="epochs_range",
                body=[
                    Stage("train_epoch", Noop),
                    Stage("eval_epoch", Noop),
                    Stage("checkpoint", Noop),
                ],
            ),
            Stage("finalize", Noop),
        ]

    def epochs_range(self, ctx: Context) -> range:
        return range(ctx.get_config("epochs", 1))

    def validate_config(self, config: Mapping[str, Any]) -> None:
        if config.get("model") is None:
            raise InvalidConfig(
                message="model is required - specify the model to fine-tune",
                details={"field": "model"},
            )
        if config.get("dataset") is None:
            raise InvalidConfig(
                message="dataset is required - specify the training dataset",
                details={"field": "dataset"},
            )

        _require_int(config, "epochs", minimum=1)
        _require_int(config, "batch_size", minimum=1)

        learning_rate = config.get("learning_rate")
        if not _is_number(learning_rate) or learning_rate <= 0:
            raise InvalidConfig(
                message=f"learning_rate must be a positive number, got {learning_rate!r}",
                details={"field": "learning_rate"},
            )

        if config.get("lora_rank") is not None:
            _require_int(config, "lora_rank", minimum=1)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_int(config: Mapping[str, Any], field: str, *, minimum: int) -> None:
    value = config.get(field)
    if not isinstance(value, int) or isinstance(value, bool) or value < minimum:
        raise InvalidConfig(
            message=f"{field} must be an integer >= {minimum}, got {value!r}",
            details={"field": field},
        )
