"""Common utilities shared by builders: vocabulary, IRIs and result types."""

from __future__ import annotations

from . import iri
from .namespaces import CORE, EVOLUTION, OTP, PROV, STRUCTURE, bind_namespaces
from .types import (
    BuildAllResult,
    BuildResult,
    ExpressionResult,
    MissingBaseIRIError,
    NoModuleContextError,
    RdfList,
    Triple,
)

__all__ = [
    "iri",
    "CORE",
    "EVOLUTION",
    "OTP",
    "PROV",
    "STRUCTURE",
    "bind_namespaces",
    "BuildAllResult",
    "BuildResult",
    "ExpressionResult",
    "MissingBaseIRIError",
    "NoModuleContextError",
    "RdfList",
    "Triple",
]
