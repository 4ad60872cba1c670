"""
Name filter: select registered workloads by regular expression.
"""

import re
import logging
from typing import Iterable, List, Pattern

from .errors import ConfigError

logger = logging.getLogger(__name__)


def compile_filter(pattern: str) -> Pattern:
    """
    Compile a workload name filter.

    Args:
        pattern: Regular expression matched anywhere in a workload name

    Returns:
        Compiled pattern

    Raises:
        ConfigError: If the pattern is not a valid regular expression
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigError(f"Invalid workload filter {pattern!r}: {e}") from e


def filter_workloads(pattern: str, workloads: Iterable) -> List:
    """
    Return the workloads whose name matches pattern, in their original order.

    The pattern is compiled before any workload is inspected, so an invalid
    pattern fails before anything runs. Matching nothing is not an error.
    """
    regex = compile_filter(pattern)
    selected = [workload for workload in workloads if regex.search(workload.name)]
    logger.debug(f"Filter {pattern!r} selected {len(selected)} workload(s)")
    return selected
