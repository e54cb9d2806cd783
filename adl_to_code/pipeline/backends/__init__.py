"""
Backends module.

Contains the importing helper, the code emitter and the generators for each
target.
"""

from __future__ import annotations

from .base import CodeBackend, Phase, PhaseState
from .code_emitter import CodeEmitter
from .endpoints_backend import EndpointsBackend
from .importing_helper import ImportingHelper, ModuleImport
from .kysely_backend import KyselyBackend
from .seaquery_backend import SeaQueryBackend
from .service_backend import ServiceBackend

__all__ = [
    "CodeBackend",
    "CodeEmitter",
    "EndpointsBackend",
    "ImportingHelper",
    "KyselyBackend",
    "ModuleImport",
    "Phase",
    "PhaseState",
    "SeaQueryBackend",
    "ServiceBackend",
]
