"""
Configuration Loader (``erp_config.loader``).

Responsibility
--------------
Loads YAML files and parses them into ``erp_config.schema`` dataclasses.
Callers use ``erp_config.get_active_settings()`` rather than this module.

Invariants enforced
-------------------
* Unknown keys in a section raise ``ValueError``; no silent typos.
* ``compute_checksum`` is deterministic for identical content.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Invalid values  -> ``ValueError`` from the schema dataclasses.
"""

from __future__ import annotations

import dataclasses
import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from erp_config.schema import ErpSettings, StoreSettings
from erp_modules.inventory.config import InventoryConfig
from erp_modules.payroll.config import PayrollConfig
from erp_modules.procurement.config import ProcurementConfig
from erp_modules.sales.config import SalesConfig

SECTIONS: dict[str, type] = {
    "store": StoreSettings,
    "inventory": InventoryConfig,
    "procurement": ProcurementConfig,
    "sales": SalesConfig,
    "payroll": PayrollConfig,
}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_section(name: str, data: dict[str, Any] | None) -> Any:
    """Build the dataclass for one top-level section."""
    cls = SECTIONS[name]
    data = data or {}
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown keys in '{name}' settings: {sorted(unknown)}")
    return cls(**data)


def compute_checksum(data: dict[str, Any]) -> str:
    canonical = json.dumps(data, sort_keys=True, default=str, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def parse_settings(data: dict[str, Any]) -> ErpSettings:
    unknown = set(data) - set(SECTIONS)
    if unknown:
        raise ValueError(f"Unknown settings sections: {sorted(unknown)}")
    sections = {name: parse_section(name, data.get(name)) for name in SECTIONS}
    return ErpSettings(**sections, checksum=compute_checksum(data))


def load_settings(path: Path) -> ErpSettings:
    return parse_settings(load_yaml_file(path))
