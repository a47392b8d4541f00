"""Shared helpers for reading configuration from the environment or SSM."""

import logging
import os
from typing import Optional

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)

_ssm_client = None

# Simple in-memory cache so a warm Lambda container
# doesn't repeatedly hit SSM
_SSM_CACHE: dict[str, Optional[str]] = {}


def _client():
    global _ssm_client
    if _ssm_client is None:
        _ssm_client = boto3.client("ssm")
    return _ssm_client


def get_values_from_ssm(name: str, decrypt: bool = False) -> Optional[str]:
    """Retrieve a parameter value from SSM with optional decryption.

    Missing parameters are cached as ``None``; any other client error is
    logged and re-raised.
    """
    if name in _SSM_CACHE:
        return _SSM_CACHE[name]
    try:
        resp = _client().get_parameter(Name=name, WithDecryption=decrypt)
        value = resp["Parameter"]["Value"]
    except ClientError as exc:
        if exc.response.get("Error", {}).get("Code") == "ParameterNotFound":
            logger.debug("Parameter %s not found", name)
            _SSM_CACHE[name] = None
            return None
        logger.error("Error retrieving parameter %s: %s", name, exc)
        raise
    _SSM_CACHE[name] = value
    logger.info("Parameter value loaded for %s", name)
    return value


def get_environment_prefix() -> Optional[str]:
    """Return the SSM path configured in ``CONFIG_SSM_PREFIX`` without a trailing slash."""
    prefix = os.environ.get("CONFIG_SSM_PREFIX", "").strip()
    return prefix.rstrip("/") or None


def get_config(name: str, decrypt: bool = False) -> Optional[str]:
    """Return configuration ``name`` from the environment or SSM.

    The process environment wins. When the variable is unset and
    ``CONFIG_SSM_PREFIX`` is configured, the value is read from the
    parameter ``<prefix>/<name>``.
    """
    value = os.environ.get(name)
    if value is not None:
        return value
    prefix = get_environment_prefix()
    if not prefix:
        return None
    return get_values_from_ssm(f"{prefix}/{name}", decrypt)
