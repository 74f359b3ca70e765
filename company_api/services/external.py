# company_api/services/external.py
"""
Timeout guard for calls into third-party SDKs (identity provider, image host).

The SDKs are blocking, so each call runs in a worker thread and the request
waits for it under a single deadline. There are no retries: a second attempt
could create a duplicate identity or upload the same image twice.
"""

import asyncio
import logging
from typing import Any, Callable

from company_api.exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)


async def run_external(
    func: Callable[..., Any],
    *args: Any,
    timeout: float,
    operation: str = "external call",
    **kwargs: Any
) -> Any:
    """
    Run a blocking collaborator call with timeout protection.

    Args:
        func: Blocking callable to run
        timeout: Deadline in seconds
        operation: Name for logging and the error message

    Returns:
        Whatever ``func`` returns

    Raises:
        ServiceUnavailableError: If the deadline passes first
    """
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(func, *args, **kwargs),
            timeout=timeout
        )
    except asyncio.TimeoutError:
        logger.error(f"⏱️ {operation} timed out after {timeout}s")
        raise ServiceUnavailableError(f"{operation} timed out after {timeout}s")
