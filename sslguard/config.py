"""
Loading security policies from configuration files.

A policy file is a JSON object with the SecurityPolicy fields:

    {
        "secured": {"users": ["login", "register"], "checkout": "*"},
        "prefixes": ["admin"],
        "autoRedirect": true,
        "redirect_status_code": 301
    }
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from .exceptions import PolicyConfigurationError
from .policy import SecurityPolicy

logger = logging.getLogger(__name__)

POLICY_FILE_ENV = "SSLGUARD_POLICY_FILE"


def policy_from_mapping(data: Mapping[str, Any]) -> SecurityPolicy:
    """
    Validate a mapping into a SecurityPolicy.

    Raises:
        PolicyConfigurationError: If the mapping is not a valid policy
    """
    if not isinstance(data, Mapping):
        raise PolicyConfigurationError(
            f"Security policy must be a JSON object, got {type(data).__name__}"
        )
    try:
        return SecurityPolicy.model_validate(dict(data))
    except ValidationError as exc:
        raise PolicyConfigurationError(f"Invalid security policy: {exc}") from exc


def load_policy(path: Union[str, Path]) -> SecurityPolicy:
    """
    Load a SecurityPolicy from a JSON file.

    Raises:
        PolicyConfigurationError: If the file cannot be read or is not a valid policy
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PolicyConfigurationError(f"Cannot read security policy {path}: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PolicyConfigurationError(f"Security policy {path} is not valid JSON: {exc}") from exc

    policy = policy_from_mapping(data)
    logger.info(
        "Loaded security policy from %s: %d secured controllers, %d secured prefixes",
        path,
        len(policy.secured),
        len(policy.prefixes),
    )
    return policy


def load_policy_from_env(
    default: Optional[SecurityPolicy] = None, env_var: str = POLICY_FILE_ENV
) -> SecurityPolicy:
    """
    Load the policy file named by an environment variable.

    Falls back to ``default`` (or an empty policy) when the variable is unset.
    """
    path = os.environ.get(env_var)
    if not path:
        logger.debug("%s is not set; using default security policy", env_var)
        return default if default is not None else SecurityPolicy()
    return load_policy(path)
