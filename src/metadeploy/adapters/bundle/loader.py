"""Read metadata bundle files."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from metadeploy.adapters.bundle.schema import MetadataBundle
from metadeploy.adapters.bundle.translator import BundleError

if TYPE_CHECKING:
    from pathlib import Path

log = logging.getLogger(__name__)


def load_bundle(path: Path) -> MetadataBundle:
    """Parse and validate the JSON bundle at ``path``."""

    try:
        bundle = MetadataBundle.model_validate_json(path.read_bytes())
    except ValidationError as exc:
        raise BundleError(f"Invalid metadata bundle {path}: {exc}") from exc
    log.debug("Loaded bundle %s with %d objects", bundle.name or path.name, len(bundle.objects))
    return bundle
