"""Natural-language forecast explanations using Gemini."""
from typing import Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import BaseModel, Field, ValidationError

from ..ledger.models import ForecastResult
from ..utils.logger import get_logger
from ..utils.retry import retry_with_backoff
from ..utils.exceptions import LLMError, RetryableLLMError, RetryableNetworkError

logger = get_logger()

MISSING_KEY_MESSAGE = "API Key is missing. Please configure GEMINI_API_KEY to see AI explanations."
EMPTY_RESPONSE_MESSAGE = "Could not generate explanation."
FAILURE_MESSAGE = (
    "Sorry, I couldn't generate a financial insight at this moment due to a connection error."
)


class InsightSchema(BaseModel):
    """Pydantic schema for the structured LLM reply."""
    summary: str = Field(description="One sentence summarizing the spending trend")
    reasoning: str = Field(description="Why the forecast looks the way it does")
    tip: str = Field(description="One specific, actionable tip to improve next month's cash flow")

    def to_text(self) -> str:
        parts = [self.summary, self.reasoning, self.tip]
        return " ".join(part.strip() for part in parts if part and part.strip())


def describe_changes(forecast: ForecastResult) -> str:
    """Render significant category changes as one line of text."""
    if not forecast.significant_changes:
        return "none"
    return ", ".join(
        f"{change.category}: {'+' if change.percentage_change > 0 else ''}"
        f"{change.percentage_change:.1f}% "
        f"(from ${change.previous_amount:.2f} to ${change.current_amount:.2f})"
        for change in forecast.significant_changes
    )


def build_prompt(forecast: ForecastResult) -> str:
    """Build the explanation prompt from a forecast."""
    last_month = forecast.last_month_statistics
    return f"""You are a helpful financial assistant for a personal finance dashboard.
Analyze the following monthly expense data:

- Last Month ({last_month.month}) Total Expenses: ${last_month.total_expenses:.2f}
- Last Month Cash Flow: ${last_month.cash_flow:.2f}
- Prediction for Next Month Expenses: ${forecast.predicted_next_month_expenses:.2f}
- Prediction for Next Month Cash Flow: ${forecast.predicted_next_month_cash_flow:.2f}
- Significant Category Changes vs Previous Month: {describe_changes(forecast)}

Task:
1. summary: summarize the user's spending trend briefly.
2. reasoning: explain why the forecast looks the way it does based on the data provided
   (e.g., mention the increase/decrease in specific categories).
3. tip: give one specific, actionable tip to improve their cash flow next month.

Tone: friendly, encouraging and concise (max 3-4 sentences in total). Avoid complex jargon.
"""


class InsightGenerator:
    """Explains forecasts with Gemini, falling back to fixed messages."""
    
    def __init__(
        self,
        api_key: Optional[str],
        model_name: str = "gemini-2.5-flash",
        timeout_seconds: int = 30,
        max_retries: int = 2,
        initial_delay: float = 1,
        backoff_factor: int = 2
    ):
        """
        Initialize insight generator.
        
        Args:
            api_key: Google AI API key, None disables the call
            model_name: Gemini model to query
            timeout_seconds: HTTP timeout per request
            max_retries: Retries for transient failures
            initial_delay: First retry delay in seconds
            backoff_factor: Multiplier applied per retry
        """
        self.api_key = api_key
        self.model_name = model_name
        self.client = None
        if api_key:
            self.client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=int(timeout_seconds * 1000))
            )
        self._request = retry_with_backoff(
            max_retries=max_retries,
            initial_delay=initial_delay,
            backoff_factor=backoff_factor
        )(self._generate_content)
    
    def generate(self, forecast: ForecastResult) -> str:
        """
        Explain a forecast in a few sentences.
        
        Never raises: missing credentials, empty replies and call failures
        map to fixed fallback messages.
        """
        if not self.client:
            logger.warning("Gemini API key not configured; skipping AI explanation")
            return MISSING_KEY_MESSAGE
        
        try:
            text = self._request(build_prompt(forecast))
        except Exception as e:
            logger.error(f"Error generating explanation: {e}")
            return FAILURE_MESSAGE
        
        if not text or not text.strip():
            logger.warning("Gemini returned an empty explanation")
            return EMPTY_RESPONSE_MESSAGE
        
        return self._parse_response(text)
    
    def _generate_content(self, prompt: str) -> str:
        """Send one request to Gemini and return the raw text."""
        logger.debug(f"Requesting explanation from {self.model_name}")
        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=InsightSchema
                )
            )
        except genai_errors.APIError as e:
            # 429 and 5xx are transient
            if e.code == 429 or (e.code is not None and e.code >= 500):
                raise RetryableLLMError(f"Gemini request failed ({e.code}): {e}")
            raise LLMError(f"Gemini rejected the request ({e.code}): {e}")
        except httpx.TransportError as e:
            raise RetryableNetworkError(f"Gemini connection failed: {e}")
        if response is None:
            raise LLMError("Gemini returned no response")
        return response.text or ""
    
    @staticmethod
    def _parse_response(text: str) -> str:
        """Turn the structured reply into prose; unstructured replies pass through."""
        cleaned = text.strip()
        if cleaned.startswith("```"):
            lines = cleaned.split("\n")
            cleaned = "\n".join(lines[1:-1]) if len(lines) > 2 else cleaned
        
        try:
            insight = InsightSchema.model_validate_json(cleaned)
        except ValidationError:
            logger.debug("Explanation was not structured JSON; using raw text")
            return text.strip()
        
        return insight.to_text() or EMPTY_RESPONSE_MESSAGE
