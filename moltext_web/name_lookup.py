"""
Chemical name to SMILES lookup through an OPSIN-compatible service.

The service accepts ``POST {"name": ...}`` and answers
``{"success": true, "smiles": "..."}``.
"""

import json
import logging
import urllib.error
import urllib.request
from typing import Any, Dict

from .errors import NameResolutionError

logger = logging.getLogger(__name__)


def http_json(url: str, payload: Dict[str, Any], timeout: float = 10.0) -> Dict[str, Any]:
    data = json.dumps(payload).encode("utf-8")
    req = urllib.request.Request(url, data=data, method="POST")
    req.add_header("Content-Type", "application/json")
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        return json.loads(resp.read().decode("utf-8"))


def name_to_smiles(name: str, url: str, timeout: float = 10.0) -> str:
    """
    Resolve a chemical name to SMILES.

    Raises:
        NameResolutionError: the service answered with an HTTP error (``status``
            is set), reported failure, or could not be reached
    """
    try:
        data = http_json(url, {"name": str(name)}, timeout=timeout)
    except urllib.error.HTTPError as e:
        logger.warning(f"Name lookup for '{name}' failed with HTTP {e.code}")
        raise NameResolutionError(f"Name-to-SMILES conversion failed (HTTP {e.code})",
                                  status=e.code) from e
    except (urllib.error.URLError, OSError, ValueError) as e:
        logger.warning(f"Name lookup for '{name}' errored: {e}")
        raise NameResolutionError("Name-to-SMILES conversion error") from e

    if not isinstance(data, dict) or not data.get("success") or not data.get("smiles"):
        raise NameResolutionError("Name-to-SMILES conversion failed")

    smiles = str(data["smiles"])
    logger.info(f"Resolved '{name}' -> {smiles}")
    return smiles
