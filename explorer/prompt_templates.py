insight_system_instructions = (
    "You are a data scientist specializing in correlation analysis and pattern recognition. "
    "Focus on identifying meaningful relationships between variables."
)

insight_prompt_template = """Analyze this dataset and provide insights about relationships and patterns:

Dataset Summary:
- Rows: {row_count}
- Columns: {column_count}
- Column Details: {column_details}

Sample Data:
{sample_json}

Please analyze and provide 3-5 key insights focusing on:
1. Correlations between numerical variables
2. Patterns between categorical and numerical variables
3. Time-based trends if temporal data exists
4. Interdependencies between variables
5. Cause-and-effect relationships if apparent

For each insight, provide:
- A clear title highlighting the relationship
- A detailed description of the pattern or correlation
- Statistical significance if applicable
- A specific recommendation for leveraging this relationship

Format: Keep insights separated by double newlines, with clear headers and sections."""


question_system_instructions = (
    "You are a data analysis expert. Provide clear, actionable insights based on the data provided."
)

question_prompt_template = """Given this dataset sample:
{sample_json}

User's question: {question}

Please analyze the data and provide a clear, concise response."""
