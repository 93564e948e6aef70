from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List

import yaml
from pydantic import TypeAdapter, ValidationError

from interfacery.domain.models import InterfaceSignatures
from interfacery.errors import SignatureProviderError

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(List[InterfaceSignatures])


def parse_signature_document(data: Any, source: str = "<document>") -> List[InterfaceSignatures]:
    """
    Validate an already-decoded signature document.

    Accepts either a list of interface records or {"interfaces": [...]}.
    Keys may be snake_case or camelCase (interfaceName, typeExpr, ...).
    """
    if isinstance(data, dict) and "interfaces" in data:
        data = data["interfaces"]
    if not isinstance(data, list):
        raise SignatureProviderError(f"{source}: expected a list of interface records")
    try:
        return _RECORDS.validate_python(data)
    except ValidationError as e:
        raise SignatureProviderError(f"{source}: invalid signature document: {e}") from e


def load_signature_document(path: Path) -> List[InterfaceSignatures]:
    """Load the input contract from a .json, .yaml or .yml file."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SignatureProviderError(f"cannot read {path}: {e}") from e

    try:
        if path.suffix.lower() in {".yml", ".yaml"}:
            data = yaml.safe_load(raw)
        else:
            data = json.loads(raw)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise SignatureProviderError(f"cannot parse {path}: {e}") from e

    records = parse_signature_document(data, source=str(path))
    logger.info("loaded %d interface(s) from %s", len(records), path)
    return records
