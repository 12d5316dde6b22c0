"""Optional loan commentary from a Gemini model.

The advisor turns the loan inputs and the computed EMI into a short prompt and
asks a generative model for a few tips. It is best-effort: a missing API key,
a disabled advisor or any API failure yields ``Advice(ok=False)`` with a fixed
message instead of raising. The calculation engine never imports this module.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional

import google.generativeai as genai

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "AI insights are not configured. Set GEMINI_API_KEY to enable them."
FAILURE_MESSAGE = "Unable to fetch AI insights. Check your connection."
EMPTY_MESSAGE = "Unable to generate insights at this time."


@dataclass(frozen=True)
class Advice:
    text: str
    ok: bool

    def to_dict(self) -> dict:
        return {"text": self.text, "ok": self.ok}


def build_prompt(principal: float, annual_rate: float, tenure_years: int, monthly_payment: float) -> str:
    return (
        "Analyze this loan and provide 3 brief financial tips: "
        f"Loan Amount {principal:.2f}, Interest Rate {annual_rate}%, Tenure {tenure_years} years. "
        f"Monthly EMI is {monthly_payment:.2f}. "
        "Focus on interest savings and affordability. Keep it concise."
    )


def fetch_advice(
    principal: float,
    annual_rate: float,
    tenure_years: int,
    monthly_payment: float,
    settings: Optional[Settings] = None,
) -> Advice:
    """Ask the configured model for commentary on a loan."""
    settings = settings or get_settings()

    if not settings.EMI_ADVISOR_ENABLED or not settings.GEMINI_API_KEY:
        logger.warning("Gemini API key missing or advisor disabled; skipping AI insights.")
        return Advice(text=UNAVAILABLE_MESSAGE, ok=False)

    prompt = build_prompt(principal, annual_rate, tenure_years, monthly_payment)
    try:
        genai.configure(api_key=settings.GEMINI_API_KEY)
        model = genai.GenerativeModel(settings.GEMINI_MODEL)
        logger.info("Requesting loan insights from %s", settings.GEMINI_MODEL)
        response = model.generate_content(
            prompt,
            request_options={"timeout": settings.EMI_ADVISOR_TIMEOUT},
        )
        text = (response.text or "").strip()
    except Exception as exc:
        logger.error("Gemini API error: %s", exc)
        return Advice(text=FAILURE_MESSAGE, ok=False)

    if not text:
        logger.warning("Gemini returned an empty response")
        return Advice(text=EMPTY_MESSAGE, ok=False)
    return Advice(text=text, ok=True)
