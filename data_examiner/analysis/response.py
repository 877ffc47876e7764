"""
Analysis Response Parsing

Splits a markdown analysis from the optional fenced chart description
that may follow it.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional
import json
import logging
import re

logger = logging.getLogger(__name__)

_FENCED_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")
_HORIZONTAL_SPACE_RE = re.compile(r"[^\S\r\n]+")


@dataclass
class ParsedResponse:
    analysis: str
    chart_description: Optional[Dict[str, Any]]
    raw: str


def clean_response(content: str) -> str:
    """Drop NUL and zero-width characters and collapse runs of spaces."""
    content = content.replace("\u0000", "").replace("\u200b", "")
    content = _HORIZONTAL_SPACE_RE.sub(" ", content)
    return content.strip()


def parse_analysis_response(content: str) -> ParsedResponse:
    """
    Parse an analysis response.

    The first fenced block that holds a JSON object is taken as the chart
    description and removed from the analysis text. Blocks that do not
    parse are left in place.
    """
    cleaned = clean_response(content)
    for match in _FENCED_BLOCK_RE.finditer(cleaned):
        try:
            description = json.loads(match.group(1))
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse chart JSON: {e.msg}")
            continue
        if not isinstance(description, dict):
            continue
        analysis = (cleaned[:match.start()] + cleaned[match.end():]).strip()
        return ParsedResponse(analysis=analysis, chart_description=description, raw=cleaned)

    return ParsedResponse(analysis=cleaned, chart_description=None, raw=cleaned)
