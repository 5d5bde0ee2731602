"""
Analysis Normalizer
Extracts the JSON payload from raw model output and coerces it into an
AnalysisResult. Shape problems never raise; each field falls back to a
safe default instead.
"""

import json
import math
import re
from typing import Any, List

from legalens.errors import ParseError
from legalens.schemas.analysis import (
    AnalysisResult,
    Finding,
    RISK_LEVELS,
    DEFAULT_RISK_LEVEL,
    DEFAULT_RISK_SCORE,
)


# First "{" through last "}"
JSON_OBJECT_PATTERN = re.compile(r'\{[\s\S]*\}')


def extract_json_object(raw_text: str) -> dict:
    """Pull the outermost JSON object out of free-form model text."""
    match = JSON_OBJECT_PATTERN.search(raw_text or "")
    if not match:
        raise ParseError("no JSON object found")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ParseError("malformed JSON") from e

    if not isinstance(data, dict):
        raise ParseError("malformed JSON")
    return data


def normalize_risk_level(value: Any) -> str:
    """Return one of low/medium/high, defaulting to medium."""
    if isinstance(value, str):
        level = value.strip().lower()
        if level in RISK_LEVELS:
            return level
    return DEFAULT_RISK_LEVEL


def normalize_risk_score(value: Any) -> int:
    """Return an int in [0, 100], defaulting to 50."""
    # bool is an int subclass but never a score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_RISK_SCORE
    if isinstance(value, float) and not math.isfinite(value):
        return DEFAULT_RISK_SCORE
    if not 0 <= value <= 100:
        return DEFAULT_RISK_SCORE
    return int(round(value))


def normalize_recommendations(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return "\n".join(str(item) for item in value if item is not None)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _normalize_suggestions(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    suggestions = []
    for item in value:
        if item is None:
            continue
        if isinstance(item, str):
            text = item
        elif isinstance(item, (dict, list)):
            text = json.dumps(item, ensure_ascii=False, default=str)
        else:
            text = str(item)
        if text.strip():
            suggestions.append(text)
    return suggestions


def normalize_finding(item: Any) -> Finding | None:
    """
    Coerce one element of the findings array.

    Bare strings become medium-risk findings without suggestions. Objects
    keep their valid fields. Returns None for elements with nothing to
    show (None, blank strings).
    """
    if item is None:
        return None

    if isinstance(item, str):
        if not item.strip():
            return None
        return Finding(text=item, risk_level=DEFAULT_RISK_LEVEL, suggestions=[])

    if isinstance(item, dict):
        text = item.get('text')
        if not isinstance(text, str) or not text.strip():
            text = json.dumps(item, ensure_ascii=False, default=str)
        return Finding(
            text=text,
            risk_level=normalize_risk_level(item.get('riskLevel')),
            suggestions=_normalize_suggestions(item.get('suggestions')),
        )

    return Finding(text=str(item), risk_level=DEFAULT_RISK_LEVEL, suggestions=[])


def normalize_findings(value: Any, strict: bool = False) -> List[Finding]:
    """
    Coerce the findings field into a list of Finding.

    In strict mode a non-list value raises ParseError. Otherwise a lone
    string or object is treated as a one-element list and anything else
    as empty.
    """
    if not isinstance(value, list):
        if strict:
            raise ParseError("invalid findings format")
        if isinstance(value, (str, dict)):
            value = [value]
        else:
            value = []

    findings = []
    for item in value:
        if isinstance(item, Finding):
            findings.append(item)
            continue
        finding = normalize_finding(item)
        if finding is not None:
            findings.append(finding)
    return findings


def extract_and_normalize(raw_text: str, strict: bool = False) -> AnalysisResult:
    """
    Turn raw model output into a validated AnalysisResult.

    Raises ParseError only when no JSON object can be found or decoded,
    or (strict mode) when findings is not an array.
    """
    data = extract_json_object(raw_text)

    return AnalysisResult(
        findings=normalize_findings(data.get('findings'), strict=strict),
        risk_level=normalize_risk_level(data.get('riskLevel')),
        risk_score=normalize_risk_score(data.get('riskScore')),
        recommendations=normalize_recommendations(data.get('recommendations')),
    )
