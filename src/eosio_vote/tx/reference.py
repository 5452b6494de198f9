"""
Chain reference and producer list retrieval.

Both operations make their network calls once and return an Outcome;
retrying is up to the caller.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..api_client import ChainClient
from ..config import VoteConfig
from ..runtime.classify import (
    EMPTY_BLOCK_DATA_MESSAGE,
    EMPTY_CHAIN_INFO_MESSAGE,
    PRODUCERS_MESSAGE,
    ErrorContext,
    classify,
)
from ..runtime.errors import ClassifiedError, ErrorCategory, Outcome
from .header import ChainReference

logger = logging.getLogger(__name__)


def _has_fields(data: Any, *fields: str) -> bool:
    return bool(data) and isinstance(data, dict) and all(data.get(f) is not None for f in fields)


def _usable_info(info: Any) -> bool:
    if not _has_fields(info, "chain_id", "last_irreversible_block_num"):
        return False
    chain_id = info["chain_id"]
    block_num = info["last_irreversible_block_num"]
    return (
        isinstance(chain_id, str) and chain_id != ""
        and isinstance(block_num, int) and not isinstance(block_num, bool) and block_num >= 0
    )


def fetch_chain_reference(client: ChainClient) -> Outcome[ChainReference]:
    """
    Fetch chain identity and the last irreversible block's reference data.

    Chain info is queried first; the block is only requested when chain info
    was obtained. A call that succeeds with an empty result counts as a
    failure.

    Args:
        client: Chain API client

    Returns:
        Outcome carrying the ChainReference or a classified error
    """
    try:
        info = client.get_info()
    except Exception as e:
        return Outcome.failure(classify(e, ErrorContext.INFO))

    if not _usable_info(info):
        logger.warning("Chain info response was empty: %r", info)
        return Outcome.failure(ClassifiedError(
            category=ErrorCategory.EMPTY_CHAIN_INFO, message=EMPTY_CHAIN_INFO_MESSAGE,
        ))

    try:
        block = client.get_block(info["last_irreversible_block_num"])
    except Exception as e:
        return Outcome.failure(classify(e, ErrorContext.BLOCK))

    if not _has_fields(block, "block_num", "ref_block_prefix"):
        logger.warning("Block response was empty for block %s", info["last_irreversible_block_num"])
        return Outcome.failure(ClassifiedError(
            category=ErrorCategory.EMPTY_BLOCK_DATA, message=EMPTY_BLOCK_DATA_MESSAGE,
        ))

    try:
        reference = ChainReference(
            chain_id=info["chain_id"],
            block_num=block["block_num"],
            ref_block_prefix=block["ref_block_prefix"],
        )
    except ValidationError as e:
        logger.warning("Block reference data was malformed: %s", e)
        return Outcome.failure(ClassifiedError(
            category=ErrorCategory.EMPTY_BLOCK_DATA, message=EMPTY_BLOCK_DATA_MESSAGE,
        ))

    logger.info("Chain reference: block %d, prefix %d", reference.block_num, reference.ref_block_prefix)
    return Outcome.success(reference)


def list_producers(client: ChainClient, config: Optional[VoteConfig] = None) -> Outcome[List[Dict[str, Any]]]:
    """
    List registered producers.

    Rows are passed through unmodified.

    Args:
        client: Chain API client
        config: Table location and row limit; defaults to the client's config

    Returns:
        Outcome carrying the producer rows or a classified error
    """
    config = config or client.config
    try:
        result = client.get_table_rows(
            code=config.producers_account,
            scope=config.producers_scope,
            table=config.producers_table,
            limit=config.producers_limit,
        )
    except Exception as e:
        return Outcome.failure(classify(e, ErrorContext.PRODUCERS))

    rows = result.get("rows") if isinstance(result, dict) else None
    if not isinstance(rows, list):
        logger.warning("Producer table response had no rows: %r", result)
        return Outcome.failure(ClassifiedError(
            category=ErrorCategory.PRODUCERS_UNAVAILABLE, message=PRODUCERS_MESSAGE,
        ))
    return Outcome.success(rows)
