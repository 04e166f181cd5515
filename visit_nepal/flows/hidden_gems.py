"""Hidden-gem suggestions for a single district."""

from __future__ import annotations

from typing import Any, Dict, Union

from ..models import HiddenGemsRequest, HiddenGemsResponse
from .base import PromptFlow, object_schema, string_list


HIDDEN_GEMS_PARAMETERS = object_schema(
    {
        "hiddenGems": string_list(
            "3-5 specific hidden gem location suggestions, each with a brief description."
        )
    }
)

EXAMPLE_GEMS = [
    "Panchase Village Trek: A shorter, less crowded trek offering stunning Annapurna views and authentic village experiences.",
    "Begnas Lake: Quieter and less commercialized than Phewa Lake, perfect for peaceful boating and relaxation.",
]


def render_hidden_gems_prompt(req: HiddenGemsRequest) -> str:
    name = req.district_name
    if req.user_preferences:
        focus = (
            f"They have specific interests: **{req.user_preferences}**. You **MUST** tailor your "
            "suggestions based on these preferences. Focus on locations or experiences that align "
            "directly with what the user is looking for."
        )
    else:
        focus = (
            "They haven't specified particular interests, so suggest a diverse range of unique and "
            "interesting places or experiences that are not typically found in standard tourist "
            "guides for this district."
        )
    examples = "\n".join(f"- {gem}" for gem in EXAMPLE_GEMS)
    return (
        "You are a local travel expert, intimately familiar with all the hidden gems and "
        "off-the-beaten-path locations in Nepal's districts.\n\n"
        f"A user is exploring the district of **{name}**.\n\n"
        f"{focus}\n\n"
        f"Suggest between 3 and 5 (never fewer than 3) specific hidden gems or off-the-beaten-path "
        f"locations/experiences within **{name}**. For each suggestion, provide a brief "
        "description (1-2 sentences) explaining why it's a hidden gem.\n\n"
        "Return each suggestion as one string in 'hiddenGems', formatted like these examples "
        f"from another district:\n{examples}"
    )


hidden_gems_flow: PromptFlow[HiddenGemsRequest, HiddenGemsResponse] = PromptFlow(
    name="suggest_hidden_gems",
    request_model=HiddenGemsRequest,
    response_model=HiddenGemsResponse,
    render_prompt=render_hidden_gems_prompt,
    description="Return 3-5 hidden gem suggestions for a district.",
    parameters=HIDDEN_GEMS_PARAMETERS,
)


def suggest_hidden_gems(request: Union[HiddenGemsRequest, Dict[str, Any]]) -> HiddenGemsResponse:
    return hidden_gems_flow.execute(request)
