"""
Helper functions for operations on the AWS platform.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator

import boto3

""" AWS Parameter Store """


def _chunk(iterable: Iterable[str], size: int) -> Iterator[list[str]]:
    """
    Chunk an iterable into lists of size `size`.
    Used for SSM get_parameters batching because the API only allows up to 10 names at a time.
    """
    it = iter(iterable)
    while True:
        chunk = [x for _, x in zip(range(size), it, strict=False)]
        if not chunk:
            break
        yield chunk


def get_parameters(
    param_names: list[str] | str,
    base_path: str,
    *,
    decrypt: bool = False,
    region_name: str | None = None,
) -> dict[str, str | None]:
    """
    Retrieve parameters under `base_path` by leaf name.
    Returns a dict mapping each requested leaf name to its value (or None if missing).
    """
    ssm = boto3.client("ssm", region_name=region_name or os.getenv("AWS_REGION", "us-east-1"))

    if isinstance(param_names, str):
        param_names = [param_names]

    # Normalize base_path (exactly one trailing slash)
    base = base_path.rstrip("/") + "/"

    # Pre-fill with None so missing params are explicit
    result: dict[str, str | None] = {name.lower(): None for name in param_names}

    if not param_names:
        return result

    leaf_by_full = {base + name.lower(): name.lower() for name in param_names}

    for group in _chunk(leaf_by_full, 10):  # SSM get_parameters max 10 names
        resp = ssm.get_parameters(Names=group, WithDecryption=decrypt)

        for p in resp.get("Parameters", []):
            leaf = leaf_by_full.get(p["Name"])
            if leaf is not None:
                result[leaf] = p["Value"]

    return result


""" AWS CloudWatch """


def create_logger(
    log_level: str | None = None, logger_name: str = "agent-bootstrap"
) -> logging.Logger:
    """
    Create a logger for AWS Lambda that outputs to CloudWatch.

    Args:
        log_level (str | None): Logging level (e.g., "INFO", "DEBUG"). Defaults to LOG_LEVEL
            or INFO.
        logger_name (str): Name for the logger instance.

    Returns:
        logging.Logger: Configured logger instance.
    """
    log_level = log_level or os.getenv("LOG_LEVEL", "INFO")
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    # The Lambda runtime already has a handler on the root logger; only add one when
    # nothing up the hierarchy would emit the record
    if not logger.hasHandlers():
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(handler)

    return logger
