import random
from datetime import timedelta
from typing import Tuple

# base yield and variance in tonnes/acre
CROP_YIELDS = {
    "Maize": (3.2, 0.8),
    "Beans": (1.8, 0.4),
    "Coffee": (2.1, 0.6),
    "Tea": (2.8, 0.5),
    "Wheat": (2.5, 0.7),
    "Rice": (4.2, 1.0),
    "Sorghum": (2.0, 0.5),
}
DEFAULT_CROP = "Maize"
PREDICTION_VALIDITY = timedelta(days=7)


def crop_profile(crop: str) -> Tuple[float, float]:
    """Base yield and variance for ``crop``, Maize for anything unknown."""
    for name, profile in CROP_YIELDS.items():
        if name.lower() == crop.strip().lower():
            return profile
    return CROP_YIELDS[DEFAULT_CROP]


def predict_yield(crop: str, region: str, rng: random.Random = None) -> dict:
    """Placeholder yield model.

    There is no trained model behind this: the estimate is the crop's base
    yield perturbed by at most half its variance, and the confidence and
    factor scores are drawn from fixed ranges.
    """
    rng = rng or random
    base, variance = crop_profile(crop)
    crop_name = crop.lower()

    return {
        "yield_estimate": round(base + (rng.random() - 0.5) * variance, 1),
        "confidence": rng.randint(85, 99),
        "factors": [
            {
                "name": "Weather Conditions",
                "impact": "Positive",
                "score": rng.randint(80, 94),
                "description": "Favorable temperature and rainfall patterns",
            },
            {
                "name": "Soil Quality",
                "impact": "Good",
                "score": rng.randint(70, 89),
                "description": "Adequate nutrient levels and pH balance",
            },
            {
                "name": "Pest Risk",
                "impact": "Low",
                "score": rng.randint(85, 94),
                "description": "Minimal pest pressure expected",
            },
            {
                "name": "Market Conditions",
                "impact": "Favorable",
                "score": rng.randint(82, 93),
                "description": "Strong demand and stable prices",
            },
        ],
        "recommendations": [
            f"Apply nitrogen fertilizer in 2 weeks for optimal {crop_name} growth",
            "Monitor for pest activity during flowering stage",
            "Ensure adequate irrigation during grain filling period",
            "Consider early harvest if weather conditions deteriorate",
            f"Market prices for {crop_name} are expected to remain stable",
        ],
    }
