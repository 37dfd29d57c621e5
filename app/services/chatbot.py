import re
from typing import Tuple

FALLBACK_RESPONSE = (
    "I'm here to help with your farming questions. "
    "Could you be more specific about what you'd like to know?"
)
FALLBACK_CATEGORY = "general"

# (pattern, category, response) checked in order against the lower-cased
# message; first hit wins. Crop rules sit above the greeting so
# "hello, when do I plant maize?" still gets the maize answer.
RULES = [
    (r"maize|corn", "crops",
     "For maize cultivation: ensure 75cm spacing between rows and 25cm between plants. "
     "Apply DAP fertilizer at planting (50kg/acre) and top-dress with CAN after 6 weeks. "
     "Watch for fall armyworm during early growth stages."),
    (r"beans", "crops",
     "Beans require well-drained soil and moderate watering. Plant at 30cm x 10cm spacing. "
     "Avoid waterlogging which causes root rot. Apply rhizobia inoculant for better nitrogen fixation."),
    (r"coffee", "crops",
     "Coffee plants need partial shade and consistent moisture. Prune regularly to maintain 2-3 main stems. "
     "Watch for coffee berry disease and leaf rust. Harvest when berries are deep red."),
    (r"\b(?:hello|hi|hey)\b", "greeting",
     "Hello {name}! I'm AgriBot, your AI farming assistant. How can I help you today?"),
    (r"weather|rain|temperature", "weather",
     "Based on current weather patterns, conditions look favorable for the next week. "
     "I recommend monitoring soil moisture levels and checking for any pest activity after rainfall."),
    (r"pest|insect|disease", "pest",
     "For effective pest management: 1) Regular field monitoring (2x weekly), "
     "2) Use integrated pest management (IPM), 3) Encourage beneficial insects, "
     "4) Apply targeted treatments only when necessary. What specific pest are you dealing with?"),
    (r"fertilizer|nutrient", "fertilizer",
     "Soil testing is key for proper fertilization. Generally: Apply organic matter annually, "
     "use DAP/NPK at planting, and top-dress with nitrogen during active growth. "
     "Avoid over-fertilization which can reduce quality."),
    (r"harvest", "harvest",
     "Harvest timing depends on your crop and intended use. Look for visual cues like color change, "
     "moisture content, and field drying. Early morning harvesting often gives better quality. "
     "What crop are you planning to harvest?"),
]
COMPILED_RULES = [(re.compile(pattern), category, response) for pattern, category, response in RULES]


def reply(message: str, user_name: str) -> Tuple[str, str]:
    """Return ``(response, category)`` for an incoming chat message."""
    lower = message.lower()
    for pattern, category, response in COMPILED_RULES:
        if pattern.search(lower):
            return response.format(name=user_name), category
    return FALLBACK_RESPONSE, FALLBACK_CATEGORY
