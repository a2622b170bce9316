"""Prompt templates for article analysis."""

ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert news analyst specializing in bias detection, sentiment "
    "analysis, and fact-checking. Always respond with valid JSON."
)

ANALYSIS_USER_TEMPLATE = """
Analyze the following news article for bias, sentiment, and factual accuracy. Return a JSON response with the following structure:

{{
  "bias_score": (number between -100 to 100, negative = left bias, positive = right bias, 0 = neutral),
  "bias_label": "left" | "center-left" | "center" | "center-right" | "right",
  "sentiment_score": (number between -1 to 1, -1 = very negative, 1 = very positive),
  "sentiment_label": "very negative" | "negative" | "neutral" | "positive" | "very positive",
  "fact_check_score": (number between 0 to 100, 0 = completely false, 100 = completely true),
  "credibility_score": (number between 1 to 10),
  "explanation": "Detailed AI explanation of the analysis",
  "key_findings": ["finding 1", "finding 2", "finding 3"],
  "methodology": "Brief explanation of analysis methodology",
  "limitations": "Analysis limitations and caveats",
  "confidence": (number between 0 to 100)
}}

Article Headline: {headline}
Article Content: {content}

Provide only the JSON response, no other text.
"""
