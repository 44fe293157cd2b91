# src/crucible_kitchen/core/ports/resolver.py
"""
Resolução e validação de adapters do Crucible Kitchen.

Este módulo vincula nomes de port a implementações concretas a partir do
adapter map fornecido pelo usuário e verifica, antes da run, se cada
implementação satisfaz a interface do seu port.

Formato do adapter map:

    adapters = {
        "training_client": (MeuTrainingClient, {"api_key": "..."}),
        "dataset_store": MeuDatasetStore,
    }

Valores aceitos por port:
    - `Classe`             → implementação sem opções
    - `(Classe, {opções})` → implementação com opções específicas
    - `(Classe, [(nome, valor), ...])` → opções como lista de pares

Qualquer outro formato é erro de programação (`MalformedAdapterEntry`).

Decisões arquiteturais:
    - Resolução é pura e sem efeitos colaterais
    - Validação é separada da resolução, permitindo validar o conjunto
      inteiro de adapters antes de comprometer recursos com a run
    - Validação é exaustiva: todos os erros são coletados em uma passada
    - Conformidade exige declaração explícita (herança ou `register`);
      métodos homônimos por coincidência não bastam

Limites explícitos:
    - Não instancia adapters (ver `AdapterBinding.create`)
    - Não invoca operações dos adapters
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from ..errors import KitchenErrorPayload, incomplete_adapter, missing_adapter
from ..exceptions import MalformedAdapterEntry, MissingAdapter
from .registry import lookup_interface


@dataclass(frozen=True)
class AdapterBinding:
    """
    Par imutável (implementação, opções) vinculado a um port.

    Pertence ao Context que o resolveu e não muda após o início da run.
    """

    implementation: type
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.options, MappingProxyType):
            object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    def create(self) -> Any:
        """Instancia o adapter com suas opções (`implementation(**options)`)."""
        return self.implementation(**self.options)


# ---------------------------------------------------------------------------
# Resolução
# ---------------------------------------------------------------------------

def resolve(adapters: Mapping[str, Any], port: str) -> Optional[AdapterBinding]:
    """
    Resolve o adapter de um port a partir do adapter map.

    Returns:
        AdapterBinding | None: binding resolvido, ou `None` se o port não
        estiver presente no adapter map.

    Raises:
        TypeError: Se `adapters` não for um mapping.
        MalformedAdapterEntry: Se o valor do port tiver formato inválido.
    """
    if not isinstance(adapters, Mapping):
        raise TypeError(f"adapter map deve ser um mapping, recebido: {type(adapters).__name__}")

    entry = adapters.get(port)
    if entry is None:
        return None

    if isinstance(entry, type):
        return AdapterBinding(implementation=entry)

    if isinstance(entry, tuple) and len(entry) == 2 and isinstance(entry[0], type):
        options = _options(entry[1])
        if options is not None:
            return AdapterBinding(implementation=entry[0], options=options)

    raise MalformedAdapterEntry(
        f"Adapter inválido para o port '{port}': esperado Classe ou (Classe, opções), "
        f"recebido {entry!r}"
    )


def _options(raw: Any) -> Optional[Mapping[str, Any]]:
    """Normaliza opções: mapping ou lista de pares `(nome, valor)`; `None` se inválidas."""
    if isinstance(raw, Mapping):
        return raw
    if not isinstance(raw, (list, tuple)):
        return None
    if not all(isinstance(p, tuple) and len(p) == 2 and isinstance(p[0], str) for p in raw):
        return None
    return dict(raw)


def resolve_or_fail(adapters: Mapping[str, Any], port: str) -> AdapterBinding:
    """Resolve o adapter de um port, levantando `MissingAdapter` se ausente."""
    binding = resolve(adapters, port)
    if binding is None:
        raise MissingAdapter(
            message=f"Adapter obrigatório ausente: {port}",
            details={"port": port},
        )
    return binding


# ---------------------------------------------------------------------------
# Conformidade
# ---------------------------------------------------------------------------

def implements(implementation: Any, interface: type) -> bool:
    """Verifica se a implementação declara explicitamente a interface."""
    return isinstance(implementation, type) and issubclass(implementation, interface)


def _positional_bounds(fn: Any, *, drop_first: bool) -> Tuple[int, float]:
    params = [
        p
        for p in inspect.signature(fn).parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
    ]
    if drop_first and params and params[0].kind != params[0].VAR_POSITIONAL:
        params = params[1:]

    if any(p.kind == p.VAR_POSITIONAL for p in params):
        upper: float = float("inf")
        params = [p for p in params if p.kind != p.VAR_POSITIONAL]
    else:
        upper = len(params)

    required = sum(1 for p in params if p.default is p.empty)
    return required, upper


def interface_operations(interface: type) -> List[Tuple[str, int]]:
    """Lista as operações `(nome, aridade)` exigidas pela interface."""
    operations: List[Tuple[str, int]] = []
    seen = set()
    for klass in reversed(interface.__mro__):
        for name, member in vars(klass).items():
            if name in seen or not getattr(member, "__isabstractmethod__", False):
                continue
            seen.add(name)
            fn = member.__func__ if isinstance(member, (staticmethod, classmethod)) else member
            _, arity = _positional_bounds(fn, drop_first=not isinstance(member, staticmethod))
            operations.append((name, int(arity)))
    return operations


def _provides(implementation: type, name: str, arity: int) -> bool:
    try:
        member = inspect.getattr_static(implementation, name)
    except AttributeError:
        return False

    if getattr(member, "__isabstractmethod__", False):
        return False

    attr = getattr(implementation, name)
    if not callable(attr):
        return False

    try:
        # classmethods chegam já vinculados; funções simples ainda trazem `self`
        lower, upper = _positional_bounds(
            attr, drop_first=not isinstance(member, (staticmethod, classmethod))
        )
    except (TypeError, ValueError):
        # callables sem assinatura introspectável
        return True

    return lower <= arity <= upper


def missing_operations(implementation: Any, interface: type) -> List[str]:
    """Lista os nomes das operações da interface que a implementação não oferece."""
    if not isinstance(implementation, type):
        return [name for name, _ in interface_operations(interface)]
    return [
        name
        for name, arity in interface_operations(interface)
        if not _provides(implementation, name, arity)
    ]


# ---------------------------------------------------------------------------
# Validação
# ---------------------------------------------------------------------------

def _validate_port(adapters: Mapping[str, Any], port: str, *, required: bool) -> List[KitchenErrorPayload]:
    binding = resolve(adapters, port)
    if binding is None:
        return [missing_adapter(port=port)] if required else []

    interface = lookup_interface(port)
    if interface is None:
        return []

    missing = missing_operations(binding.implementation, interface)
    if implements(binding.implementation, interface) and not missing:
        return []

    return [incomplete_adapter(port=port, implementation=binding.implementation, missing=missing)]


def validate(
    adapters: Mapping[str, Any],
    required: Iterable[str],
    optional: Iterable[str] = (),
) -> List[KitchenErrorPayload]:
    """
    Valida o adapter map contra os ports exigidos por uma recipe.

    Para cada port obrigatório:
        - ausente → um erro `MISSING_ADAPTER`
        - presente, com interface conhecida e não satisfeita → um erro
          `INCOMPLETE_ADAPTER` com as operações ausentes

    Ports opcionais só são verificados quanto à conformidade quando
    presentes; sua ausência nunca é erro.

    Returns:
        List[KitchenErrorPayload]: lista vazia quando o adapter map é válido.

    Raises:
        MalformedAdapterEntry: Se algum valor do adapter map tiver formato inválido.
    """
    required_ports = list(dict.fromkeys(required))
    optional_ports = [p for p in dict.fromkeys(optional) if p not in required_ports]

    errors: List[KitchenErrorPayload] = []
    for port in required_ports:
        errors.extend(_validate_port(adapters, port, required=True))
    for port in optional_ports:
        errors.extend(_validate_port(adapters, port, required=False))
    return errors
