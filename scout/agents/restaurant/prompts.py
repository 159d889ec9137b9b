"""
Restaurant Search Prompt Templates

Contains the system prompt and user prompt builder for the restaurant search.

The search uses Gemini with Google Search grounding so that restaurant
names, addresses and phone numbers come from real, current web data.

Architecture:
- Pattern: Grounded LLM (single API call with Google Search tool)
- Model: Gemini 2.5 Flash
- Output: JSON parsed from free text (the Google Search tool does not
  support response_schema / response_mime_type)

Prompt Engineering Pattern:
- XML tags for structured content
- System prompt defines the role only
- User prompt carries the city, target language and output schema
"""

from scout.utils.constants import LANGUAGE_NAMES

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

RESTAURANT_SYSTEM_PROMPT = """You are a local food guide for Global Gourmet Scout, a mobile app that shows the top viral restaurants of any city.

<role>
You are an expert at finding restaurants that are famous, viral or highly rated RIGHT NOW, using recent reviews, articles and social media.

CRITICAL: You have access to real-time Google Search. ALL restaurant data (names, addresses, phone numbers, links) MUST come from your web search results. Never invent or hallucinate restaurant data.
</role>

<limitations>
- Only recommend restaurants you found in your web search
- URLs must be copied from search results, not constructed
- If a phone number cannot be found, use "N/A"
</limitations>

<output_format>
Always return a single valid JSON object matching the schema in the user prompt.
No markdown code blocks, no explanatory text, only the JSON object.
</output_format>"""

ALLOWED_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp")


def get_language_name(language_code: str) -> str:
    """
    Map an app language code to the language name used in prompts.

    Examples:
        - "fr" -> "French"
        - "ja" -> "Japanese"
        - anything unknown -> "English"
    """
    code = (language_code or "").split("-")[0].lower()
    return LANGUAGE_NAMES.get(code, "English")


# =============================================================================
# USER PROMPT BUILDER
# =============================================================================

def build_restaurant_user_prompt(city: str, language: str = "English") -> str:
    """
    Build the user prompt asking for a city photo and three viral restaurants.

    The city is interpolated as-is; only emptiness is rejected.

    Args:
        city: City name typed by the user (e.g., "Lisbon")
        language: Human-readable target language (e.g., "French")

    Returns:
        str: Formatted user prompt ready to be sent to Gemini

    Raises:
        ValueError: If city is empty or blank
    """
    if not city or not city.strip():
        raise ValueError("city must not be empty")

    city = city.strip()
    extensions = ", ".join(ALLOWED_IMAGE_EXTENSIONS)

    return f"""Find the top viral restaurants in the following city.

<city>
{city}
</city>

<language>
Respond in {language}. Translate ALL human-readable values (cuisine, address description, reviewSummary, tags) into {language}.
JSON keys MUST stay exactly as written in the schema below, in English.
</language>

<instructions>
Follow these steps in order:

1. CITY PHOTO
   - Search for ONE real landscape photograph of {city} (skyline, landmark or famous street)
   - It must be a real photo, NOT AI-generated, NOT an illustration or map
   - The URL must point directly to an image file ending in one of: {extensions}

2. SEARCH
   - Search for the top 5 most viral, famous or highly-rated restaurants in "{city}" right now

3. NARROW DOWN
   - Keep exactly 3, based on popularity and recent positive feedback

4. DETAILS
   For each of the 3 restaurants, search specifically for:
   - Full address
   - Phone number
   - A Google Maps link (or a valid Google Maps search link)
   - The official website, if one exists
   - A publicly accessible photo URL of the food or signature dish
   - A summary of recent reviews (what people are saying)
   - A score from 1 to 10 based on user sentiment

5. FORMAT OUTPUT
   - Return strictly valid JSON matching the output_schema
   - Do not add any conversational text outside the JSON
</instructions>

<output_schema>
{{
  "cityImageUrl": "Direct URL of a real landscape photo of {city}",
  "restaurants": [
    {{
      "id": "unique_string",
      "name": "Restaurant Name",
      "city": "{city}",
      "cuisine": "Type of food (e.g. Italian, Fusion)",
      "address": "Full Address",
      "phoneNumber": "Phone Number or 'N/A'",
      "mapUrl": "URL to Google Maps",
      "websiteUrl": "Official website URL or empty string",
      "imageUrl": "URL to an image of the food",
      "rating": 9.1,
      "reviewSummary": "A concise summary of recent reviews (max 2 sentences).",
      "tags": ["tag1", "tag2"]
    }}
  ]
}}
</output_schema>

The "restaurants" array MUST contain exactly 3 objects. "rating" is a number from 1 to 10."""
