"""Copyright (c) 2025 DFlexy"""
"""https://github.com/DFlexy"""

"""Descoberta e criação dinâmica de providers de streams."""

import importlib
import logging
import pkgutil
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Type

from .base import Provider, ProbeCapable, ProbeResult, ProviderResult

logger = logging.getLogger(__name__)

_PROVIDER_REGISTRY: Dict[str, Type[Provider]] = {}
_PROVIDER_METADATA: Dict[str, Dict[str, Any]] = {}


def _normalize_provider_type(provider_type: str) -> str:
    return provider_type.strip().lower().replace('-', '_')


# Carrega dinamicamente todas as classes que herdam de Provider
def _discover_providers() -> None:
    if _PROVIDER_REGISTRY:
        return

    package_path = Path(__file__).parent
    package_name = __name__

    for module_info in pkgutil.iter_modules([str(package_path)]):
        module_name = module_info.name

        if module_name.startswith('_') or module_name in {'base', '__init__'}:
            continue

        module = importlib.import_module(f"{package_name}.{module_name}")

        for attribute_name in dir(module):
            attribute = getattr(module, attribute_name)

            if (
                isinstance(attribute, type)
                and issubclass(attribute, Provider)
                and attribute is not Provider
            ):
                provider_type = _normalize_provider_type(getattr(attribute, "PROVIDER_TYPE", "") or module_name)
                _PROVIDER_REGISTRY[provider_type] = attribute
                _PROVIDER_METADATA[provider_type] = {
                    "type": provider_type,
                    "class_name": attribute.__name__,
                    "module": module.__name__,
                    "default_url": getattr(attribute, "DEFAULT_BASE_URL", ""),
                    "display_name": getattr(attribute, "DISPLAY_NAME", "") or attribute.__name__,
                    "probe": issubclass(attribute, ProbeCapable),
                    "doc": (attribute.__doc__ or "").strip(),
                }


# Retorna metadados dos providers disponíveis
def available_provider_types() -> Dict[str, Dict[str, Any]]:
    _discover_providers()
    return {provider_type: dict(metadata) for provider_type, metadata in _PROVIDER_METADATA.items()}


# Cria uma instância do provider solicitado
def create_provider(provider_type: str, base_url: Optional[str] = None) -> Provider:
    _discover_providers()
    normalized = _normalize_provider_type(provider_type)
    provider_class = _PROVIDER_REGISTRY.get(normalized)
    if not provider_class:
        available = ", ".join(sorted(_PROVIDER_REGISTRY.keys())) or "nenhum"
        raise ValueError(f"Provider '{provider_type}' não encontrado. Disponíveis: {available}")
    return provider_class(base_url=base_url)


# Cria vários providers, ignorando nomes desconhecidos
def create_providers(provider_types: Iterable[str]) -> List[Provider]:
    providers = []
    for provider_type in provider_types:
        try:
            providers.append(create_provider(provider_type))
        except ValueError as e:
            logger.warning(str(e))
    return providers


__all__ = [
    "Provider",
    "ProbeCapable",
    "ProbeResult",
    "ProviderResult",
    "available_provider_types",
    "create_provider",
    "create_providers",
]
