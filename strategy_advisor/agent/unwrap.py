"""
Best-effort unwrapping of the agent's final response text.

The runtime either streams plain text or a JSON envelope such as
{"content": "..."}; anything that is not a recognizable envelope is shown as-is.
"""

import json
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


def try_parse_json(text: str) -> Optional[Any]:
    """Parse text as JSON, returning None when it is not valid JSON."""
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        # RecursionError: pathologically nested arrays or objects
        return None


def _content_text(content: Any) -> Optional[str]:
    if isinstance(content, str):
        return content or None

    # Bedrock message shape: [{"type": "text", "text": "..."}, ...]
    if isinstance(content, list):
        blocks = [
            block.get('text', '')
            for block in content
            if isinstance(block, dict) and block.get('type', 'text') == 'text'
        ]
        joined = "\n\n".join(b for b in blocks if b)
        return joined or None

    return None


def unwrap_response(text: str) -> str:
    """
    Extract display text from the accumulated response.

    Args:
        text: Full text returned by the stream assembler

    Returns:
        The envelope's content when present and non-empty, else the trimmed text
    """
    raw = (text or '').strip()
    if not raw:
        return ''

    parsed = try_parse_json(raw)
    if not isinstance(parsed, dict):
        return raw

    content = _content_text(parsed.get('content'))
    if content is None:
        logger.debug("JSON response without usable 'content'; showing raw text")
        return raw
    return content
