"""
Result envelope parser for Node.js host scripts.

Host scripts print exactly one JSON envelope between
===SANDBOX_RESULT=== and ===SANDBOX_RESULT_END=== markers.
"""

import json
from typing import Any, Dict, Optional

from playground.infrastructure.logging import get_logger

logger = get_logger(__name__)

START_MARKER = "===SANDBOX_RESULT==="
END_MARKER = "===SANDBOX_RESULT_END==="
# Written to stderr by hosts once their input is read; budgets start here
READY_MARKER = "===SANDBOX_READY==="


def parse_envelope(stdout: str) -> Optional[Dict[str, Any]]:
    """
    Extract the JSON envelope from host stdout.

    Returns:
        The decoded object, or None if markers are missing or the content
        is not a JSON object

    Examples:
        >>> parse_envelope('===SANDBOX_RESULT==={"kind": "ok"}===SANDBOX_RESULT_END===')
        {'kind': 'ok'}

        >>> parse_envelope("no markers") is None
        True
    """
    if not stdout:
        return None

    start_idx = stdout.rfind(START_MARKER)
    if start_idx == -1:
        return None

    end_idx = stdout.find(END_MARKER, start_idx)
    if end_idx == -1:
        logger.warning("Start marker found but end marker missing", stdout_length=len(stdout))
        return None

    content = stdout[start_idx + len(START_MARKER):end_idx].strip()
    try:
        envelope = json.loads(content)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse result envelope", error=str(e), content_preview=content[:200])
        return None

    if not isinstance(envelope, dict):
        return None
    return envelope
