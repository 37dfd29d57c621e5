from typing import Optional, List

YIELD_HISTORY = [
    {"year": "2020", "predicted": 2.1, "actual": 1.9, "crop": "Maize", "accuracy": 90.5},
    {"year": "2021", "predicted": 2.3, "actual": 2.5, "crop": "Maize", "accuracy": 91.3},
    {"year": "2022", "predicted": 2.8, "actual": 2.6, "crop": "Maize", "accuracy": 92.9},
    {"year": "2023", "predicted": 3.1, "actual": 3.2, "crop": "Maize", "accuracy": 96.9},
    {"year": "2024", "predicted": 3.4, "actual": 3.3, "crop": "Maize", "accuracy": 97.1},
]

WEATHER_HISTORY = [
    {"month": "Jan", "rainfall": 45, "temperature": 28, "humidity": 65},
    {"month": "Feb", "rainfall": 52, "temperature": 30, "humidity": 68},
    {"month": "Mar", "rainfall": 78, "temperature": 29, "humidity": 72},
    {"month": "Apr", "rainfall": 125, "temperature": 27, "humidity": 75},
    {"month": "May", "rainfall": 89, "temperature": 25, "humidity": 78},
    {"month": "Jun", "rainfall": 34, "temperature": 23, "humidity": 70},
    {"month": "Jul", "rainfall": 28, "temperature": 22, "humidity": 68},
    {"month": "Aug", "rainfall": 31, "temperature": 23, "humidity": 69},
    {"month": "Sep", "rainfall": 42, "temperature": 25, "humidity": 71},
    {"month": "Oct", "rainfall": 67, "temperature": 27, "humidity": 73},
    {"month": "Nov", "rainfall": 98, "temperature": 28, "humidity": 76},
    {"month": "Dec", "rainfall": 72, "temperature": 29, "humidity": 74},
]


def yield_history(crop: Optional[str] = None, years: Optional[int] = None) -> List[dict]:
    rows = YIELD_HISTORY
    if crop:
        rows = [row for row in rows if row["crop"].lower() == crop.strip().lower()]
    if years:
        rows = rows[-years:]
    return rows


def average_accuracy(rows: List[dict]) -> float:
    if not rows:
        return 0.0
    return round(sum(row["accuracy"] for row in rows) / len(rows), 1)


def weather_summary(rows: List[dict]) -> dict:
    return {
        "total_rainfall": sum(row["rainfall"] for row in rows),
        "average_temperature": round(sum(row["temperature"] for row in rows) / len(rows)),
    }
