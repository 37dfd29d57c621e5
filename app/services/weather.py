import random
from datetime import datetime, timezone
from typing import Optional

DEFAULT_REGION = "Central Kenya"

# region -> (short region name, conditions, baselines); each baseline is
# (value, spread) and readings land in [value - spread, value + spread - 1]
WEATHER_BASELINES = {
    "Central Kenya": ("Central", "Partly Cloudy",
                      {"temperature": (26, 2), "humidity": (68, 5), "wind_speed": (12, 3), "precip": (15, 5)}),
    "Western Kenya": ("Western", "Humid",
                      {"temperature": (24, 2), "humidity": (80, 4), "wind_speed": (10, 2), "precip": (22, 4)}),
    "Eastern Kenya": ("Eastern", "Sunny",
                      {"temperature": (29, 2), "humidity": (60, 5), "wind_speed": (14, 3), "precip": (10, 4)}),
    "Rift Valley": ("Rift Valley", "Cool",
                    {"temperature": (22, 2), "humidity": (70, 4), "wind_speed": (8, 2), "precip": (18, 3)}),
    "Coast Province": ("Coast", "Hot & Humid",
                       {"temperature": (30, 2), "humidity": (75, 5), "wind_speed": (16, 3), "precip": (25, 5)}),
}


def current_weather(location: str, rng: random.Random = None, now: Optional[datetime] = None) -> dict:
    rng = rng or random
    now = now or datetime.now(timezone.utc)
    name = location if location in WEATHER_BASELINES else DEFAULT_REGION
    region, description, baselines = WEATHER_BASELINES[name]

    current = {
        field: value + rng.randint(-spread, spread - 1)
        for field, (value, spread) in baselines.items()
    }
    current["weather_descriptions"] = [description]
    current["observation_time"] = now.isoformat()

    return {
        "location": {"name": name, "country": "Kenya", "region": region},
        "current": current,
        "timestamp": now.isoformat(),
    }
