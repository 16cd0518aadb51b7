# explorer/insights.py
"""
AI insights about an uploaded dataset.

`generate_data_insights` asks the language model for insights and turns the
free-text reply into `AIInsight` records with `parse_ai_response`. Without an
API key, or when the request fails, heuristic demo insights are returned
instead so the UI always has something to show.
"""

import re
import json
import logging
from typing import Any, Dict, List, Optional

import openai
from openai import OpenAI

from explorer.llm import chat_completion
from explorer.prompt_templates import (
    insight_prompt_template,
    insight_system_instructions,
    question_prompt_template,
    question_system_instructions,
)
from schemas import AIInsight, ColumnKind, DatasetSummary, InsightType

Row = Dict[str, Any]

SAMPLE_ROWS = 5
HEADER_KEYWORDS = ("insight", "correlation", "relationship")
NO_API_KEY_MESSAGE = "API key not configured. Please set up your OpenAI API key."
NO_RESPONSE_MESSAGE = "No response generated"

_SECTION_BREAK = re.compile(r"\n\s*\n")
_RECOMMENDATION_LABEL = re.compile(r"recommendation:?", flags=re.IGNORECASE)


def sample_json(rows: List[Row], limit: int = SAMPLE_ROWS) -> str:
    return json.dumps(rows[:limit], indent=2, default=str)


# ───────────────────────── heuristics ──────────────────────────

def determine_insight_type(text: str) -> InsightType:
    lower = text.lower()
    if "correlation" in lower or "trend" in lower or "pattern" in lower:
        return InsightType.TREND
    if "anomaly" in lower or "outlier" in lower or "unusual" in lower:
        return InsightType.ANOMALY
    return InsightType.INSIGHT


def calculate_confidence(text: str) -> float:
    lower = text.lower()
    if "strong" in lower or "clear" in lower or "significant" in lower:
        return 0.9
    if "potential" in lower or "possible" in lower or "may" in lower:
        return 0.7
    return 0.8


def _is_header(section: str) -> bool:
    lower = section.lower()
    return section.startswith("#") or any(k in lower for k in HEADER_KEYWORDS)


def _clean_title(line: str) -> str:
    return line.lstrip("#").strip().strip("*").strip()


def parse_ai_response(content: str) -> List[AIInsight]:
    """
    Turn blank-line separated model output into insights.

    A section that starts with '#' or mentions insight/correlation/relationship
    opens a new insight. The next section is its description, a later one
    mentioning 'recommend' its recommendation. Everything else is ignored.
    """
    sections = [s.strip() for s in _SECTION_BREAK.split(content or "")]
    insights: List[AIInsight] = []
    current: Optional[Dict[str, Any]] = None

    for section in sections:
        if not section:
            continue

        if _is_header(section):
            if current:
                insights.append(AIInsight(**current))
            first_line, _, rest = section.partition("\n")
            current = {
                "type": determine_insight_type(section),
                "title": _clean_title(first_line),
                "description": rest.strip(),
                "confidence": calculate_confidence(section),
            }
        elif current and not current["description"]:
            current["description"] = section
        elif current and "recommend" in section.lower():
            current["recommendation"] = _RECOMMENDATION_LABEL.sub("", section, count=1).strip()

    if current:
        insights.append(AIInsight(**current))

    return [i for i in insights if i.title]


def get_demo_insights(summary: DatasetSummary) -> List[AIInsight]:
    numeric = summary.columns_of(ColumnKind.NUMERIC)
    categorical = summary.columns_of(ColumnKind.CATEGORICAL)
    dates = summary.columns_of(ColumnKind.DATE)

    insights: List[AIInsight] = []

    if len(numeric) >= 2:
        detail = (
            "Multiple potential correlations detected."
            if len(numeric) > 2
            else "Potential correlation identified."
        )
        insights.append(AIInsight(
            type=InsightType.TREND,
            title="Numerical Variable Correlations",
            description=f"Analysis of relationships between {', '.join(c.name for c in numeric)}. {detail}",
            recommendation="Consider creating scatter plots to visualize these relationships "
                           "and calculate Pearson correlation coefficients.",
            confidence=0.85,
        ))

    if categorical and numeric:
        insights.append(AIInsight(
            type=InsightType.INSIGHT,
            title="Category-Value Relationships",
            description=f"Analyzed impact of {categorical[0].name} on {numeric[0].name}. "
                        "Different categories show distinct value distributions.",
            recommendation="Use box plots or violin plots to visualize how numerical values vary across categories.",
            confidence=0.9,
        ))

    if dates:
        insights.append(AIInsight(
            type=InsightType.TREND,
            title="Temporal Patterns",
            description=f"Analyzed time-based patterns using {dates[0].name}. "
                        "Potential seasonal or periodic patterns may exist.",
            recommendation="Create time series visualizations to identify cycles and trends.",
            confidence=0.8,
        ))

    insights.append(AIInsight(
        type=InsightType.ANOMALY,
        title="Inter-variable Dependencies",
        description=f"Analyzed relationships between {summary.column_count} variables. "
                    "Some variables may have strong dependencies that affect data interpretation.",
        recommendation="Create a correlation matrix to visualize all pair-wise relationships between variables.",
        confidence=0.95,
    ))

    return insights


# ───────────────────────── model calls ──────────────────────────

def build_insight_prompt(summary: DatasetSummary, sample_rows: List[Row]) -> str:
    return insight_prompt_template.format(
        row_count=summary.row_count,
        column_count=summary.column_count,
        column_details=str(summary),
        sample_json=sample_json(sample_rows),
    )


def generate_data_insights(
        summary: DatasetSummary,
        sample_rows: List[Row],
        client: Optional[OpenAI],
        *,
        model: str = "gpt-4",
    ) -> List[AIInsight]:
    if client is None:
        return get_demo_insights(summary)

    try:
        content = chat_completion(
            client,
            insight_system_instructions,
            build_insight_prompt(summary, sample_rows),
            model=model,
            temperature=0.7,
            max_tokens=1000,
        )
        if not content:
            raise ValueError("No response from AI")
    except openai.OpenAIError as e:
        logging.error(f"Error generating AI insights: {e}")
        return get_demo_insights(summary)
    except ValueError as e:
        logging.warning(f"Error generating AI insights: {e}")
        return get_demo_insights(summary)

    insights = parse_ai_response(content)
    logging.info(f"Parsed {len(insights)} AI insights from {len(content)} chars")
    return insights


def ask_about_data(
        question: str,
        rows: List[Row],
        client: Optional[OpenAI],
        *,
        model: str = "gpt-4",
    ) -> Optional[str]:
    """Answer a free-text question about the data; errors come back as 'Error: ...' text."""
    if not question or not question.strip():
        return None
    if client is None:
        return NO_API_KEY_MESSAGE

    prompt = question_prompt_template.format(sample_json=sample_json(rows), question=question.strip())
    try:
        content = chat_completion(
            client,
            question_system_instructions,
            prompt,
            model=model,
            temperature=0.7,
            max_tokens=500,
        )
    except openai.OpenAIError as e:
        logging.error(f"AI prompt failed: {e}")
        return f"Error: {e}"

    return content or NO_RESPONSE_MESSAGE
