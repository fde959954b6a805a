"""Terraform configuration reading."""

from tfconfig.module_calls import Diagnostic, ModuleCall, TerraformModule, load_module
from tfconfig.sources import is_local_source

__all__ = [
    "Diagnostic",
    "ModuleCall",
    "TerraformModule",
    "is_local_source",
    "load_module",
]
