"""
Tests for AI insight generation, parsing and the free-text prompt.
"""
import json
import pytest
import openai
from unittest.mock import Mock

from conftest import make_completion
from explorer.insights import (
    NO_API_KEY_MESSAGE,
    NO_RESPONSE_MESSAGE,
    ask_about_data,
    build_insight_prompt,
    calculate_confidence,
    determine_insight_type,
    generate_data_insights,
    get_demo_insights,
    parse_ai_response,
)
from explorer.profiler import analyze_data
from schemas import ColumnKind, ColumnStats, DataColumn, DatasetSummary, InsightType


def summary_with(*kinds):
    columns = [DataColumn(name=f"{k.value}_{i}", type=k, summary=ColumnStats()) for i, k in enumerate(kinds)]
    return DatasetSummary(row_count=10, column_count=len(columns), columns=columns)


class TestDetermineInsightType:
    """Test keyword classification of sections."""

    @pytest.mark.parametrize("text", ["A clear Correlation", "Upward trend", "Seasonal pattern"])
    def test_trend_keywords(self, text):
        assert determine_insight_type(text) == InsightType.TREND

    @pytest.mark.parametrize("text", ["Anomaly found", "Outlier in sales", "Unusual spike"])
    def test_anomaly_keywords(self, text):
        assert determine_insight_type(text) == InsightType.ANOMALY

    def test_trend_wins_over_anomaly(self):
        assert determine_insight_type("Unusual correlation") == InsightType.TREND

    def test_default_is_insight(self):
        assert determine_insight_type("Revenue by region") == InsightType.INSIGHT


class TestCalculateConfidence:
    """Test keyword confidence scoring."""

    def test_high_confidence(self):
        assert calculate_confidence("A STRONG link") == 0.9
        assert calculate_confidence("statistically significant") == 0.9

    def test_low_confidence(self):
        assert calculate_confidence("a potential link") == 0.7
        assert calculate_confidence("this may matter") == 0.7

    def test_default_confidence(self):
        assert calculate_confidence("Revenue by region") == 0.8


class TestParseAIResponse:
    """Test parsing of free-text model output."""

    def test_empty_output(self):
        assert parse_ai_response("") == []

    def test_whitespace_only_output(self):
        assert parse_ai_response("  \n\n \n") == []

    def test_text_without_headers(self):
        assert parse_ai_response("Just some prose about the data.") == []

    def test_headers_descriptions_and_recommendations(self, sample_ai_response):
        insights = parse_ai_response(sample_ai_response)

        assert len(insights) == 2

        first, second = insights
        assert first.title == "Strong correlation between units and revenue"
        assert first.type == InsightType.TREND
        assert first.confidence == 0.9
        assert first.description.startswith("Revenue rises almost linearly")
        assert first.recommendation == "Forecast revenue from planned unit volumes."

        assert second.title == "Unusual spike in the South region"
        assert second.type == InsightType.ANOMALY
        assert second.confidence == 0.8
        assert "data entry error" in second.description
        assert second.recommendation is None

    def test_keyword_section_opens_insight(self):
        content = "Insight: bigger orders ship later\n\nLarge orders wait for stock."
        insights = parse_ai_response(content)

        assert len(insights) == 1
        assert insights[0].title == "Insight: bigger orders ship later"
        assert insights[0].description == "Large orders wait for stock."

    def test_multiline_header_splits_title_and_description(self):
        insights = parse_ai_response("### Possible relationship\nPrice and rating move together.")

        assert insights[0].title == "Possible relationship"
        assert insights[0].description == "Price and rating move together."
        assert insights[0].confidence == 0.7

    def test_sections_before_first_header_are_ignored(self):
        content = "Here is my analysis.\n\n# Insight one\n\nDetails."
        insights = parse_ai_response(content)

        assert [i.title for i in insights] == ["Insight one"]

    def test_confidence_always_in_range(self, sample_ai_response):
        for insight in parse_ai_response(sample_ai_response):
            assert 0.0 <= insight.confidence <= 1.0


class TestDemoInsights:
    """Test heuristic demo insights."""

    def test_mixed_dataset(self):
        summary = summary_with(ColumnKind.NUMERIC, ColumnKind.NUMERIC, ColumnKind.CATEGORICAL, ColumnKind.DATE)
        insights = get_demo_insights(summary)

        assert [i.title for i in insights] == [
            "Numerical Variable Correlations",
            "Category-Value Relationships",
            "Temporal Patterns",
            "Inter-variable Dependencies",
        ]
        assert [i.confidence for i in insights] == [0.85, 0.9, 0.8, 0.95]
        assert "Potential correlation identified." in insights[0].description

    def test_many_numeric_columns(self):
        summary = summary_with(*[ColumnKind.NUMERIC] * 3)
        insights = get_demo_insights(summary)

        assert "Multiple potential correlations detected." in insights[0].description

    def test_categorical_only_dataset(self):
        summary = summary_with(ColumnKind.CATEGORICAL)
        insights = get_demo_insights(summary)

        assert len(insights) == 1
        assert insights[0].type == InsightType.ANOMALY
        assert "between 1 variables" in insights[0].description


class TestGenerateDataInsights:
    """Test the model round trip and its fallbacks."""

    def test_no_client_returns_demo(self, sales_df):
        summary = analyze_data(sales_df)
        assert generate_data_insights(summary, [], None) == get_demo_insights(summary)

    def test_parses_model_reply(self, sales_df, mock_openai_client, sample_ai_response):
        mock_openai_client.chat.completions.create.return_value = make_completion(sample_ai_response)
        summary = analyze_data(sales_df)
        rows = sales_df.to_dict(orient="records")

        insights = generate_data_insights(summary, rows, mock_openai_client)

        assert len(insights) == 2
        kwargs = mock_openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4"
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 1000
        assert kwargs["messages"][0]["role"] == "system"
        assert "units (numeric)" in kwargs["messages"][1]["content"]

    def test_empty_reply_falls_back_to_demo(self, sales_df, mock_openai_client):
        summary = analyze_data(sales_df)
        insights = generate_data_insights(summary, [], mock_openai_client)

        assert insights == get_demo_insights(summary)

    def test_api_error_falls_back_to_demo(self, sales_df, mock_openai_client):
        mock_openai_client.chat.completions.create.side_effect = openai.OpenAIError("rate limited")
        summary = analyze_data(sales_df)

        assert generate_data_insights(summary, [], mock_openai_client) == get_demo_insights(summary)

    def test_reply_without_choices_falls_back_to_demo(self, sales_df, mock_openai_client):
        mock_openai_client.chat.completions.create.return_value = Mock(choices=[])
        summary = analyze_data(sales_df)

        assert generate_data_insights(summary, [], mock_openai_client) == get_demo_insights(summary)

    def test_prompt_includes_only_five_sample_rows(self, sales_df):
        summary = analyze_data(sales_df)
        rows = sales_df.to_dict(orient="records")

        prompt = build_insight_prompt(summary, rows)
        sample = prompt.split("Sample Data:\n", 1)[1].split("\n\nPlease analyze", 1)[0]

        assert len(json.loads(sample)) == 5
        assert "- Rows: 6" in prompt


class TestAskAboutData:
    """Test the free-text question prompt."""

    def test_blank_question_sends_nothing(self, mock_openai_client):
        assert ask_about_data("   ", [], mock_openai_client) is None
        mock_openai_client.chat.completions.create.assert_not_called()

    def test_no_client(self):
        assert ask_about_data("What is the average?", [], None) == NO_API_KEY_MESSAGE

    def test_returns_model_reply(self, mock_openai_client):
        mock_openai_client.chat.completions.create.return_value = make_completion("About 35 units.")
        rows = [{"units": "10"}, {"units": "60"}]

        answer = ask_about_data("What is the average?", rows, mock_openai_client)

        assert answer == "About 35 units."
        kwargs = mock_openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["max_tokens"] == 500
        assert "User's question: What is the average?" in kwargs["messages"][1]["content"]

    def test_empty_reply(self, mock_openai_client):
        assert ask_about_data("Anything?", [], mock_openai_client) == NO_RESPONSE_MESSAGE

    def test_reply_without_choices(self, mock_openai_client):
        mock_openai_client.chat.completions.create.return_value = Mock(choices=[])
        assert ask_about_data("Anything?", [], mock_openai_client) == NO_RESPONSE_MESSAGE

    def test_error_becomes_message(self, mock_openai_client):
        mock_openai_client.chat.completions.create.side_effect = openai.OpenAIError("boom")
        assert ask_about_data("Anything?", [], mock_openai_client) == "Error: boom"
