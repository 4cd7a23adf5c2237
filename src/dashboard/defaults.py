"""
Literal fallback values used by the projectors when the payload carries
neither the canonical nor a legacy value. The presentation layer and the
test fixtures depend on these exact numbers.
"""

# ---------- Weather ----------
WEATHER_CURRENT_DEFAULTS = {
    "temperature": 24.5,
    "humidity": 65.0,
    "windSpeed": 10.2,
    "realFeel": 25.0,
    "windGust": 0.0,
    "pressure": 1013.2,
    "visibility": 15.0,
    "uvIndex": 3.0,
}

SEVEN_DAY_FORECAST_DEFAULT = [
    {"date": "2025-09-24", "maxTemp": 28.0, "minTemp": 18.0, "precipitationSum": 0.0, "windMax": 12.0, "uvMax": 5.0},
    {"date": "2025-09-25", "maxTemp": 28.5, "minTemp": 18.5, "precipitationSum": 0.0, "windMax": 10.0, "uvMax": 4.0},
    {"date": "2025-09-26", "maxTemp": 29.0, "minTemp": 19.0, "precipitationSum": 5.0, "windMax": 15.0, "uvMax": 3.0},
    {"date": "2025-09-27", "maxTemp": 29.5, "minTemp": 19.5, "precipitationSum": 0.0, "windMax": 8.0, "uvMax": 6.0},
    {"date": "2025-09-28", "maxTemp": 30.0, "minTemp": 20.0, "precipitationSum": 0.0, "windMax": 11.0, "uvMax": 5.0},
    {"date": "2025-09-29", "maxTemp": 30.5, "minTemp": 20.5, "precipitationSum": 2.0, "windMax": 13.0, "uvMax": 4.0},
    {"date": "2025-09-30", "maxTemp": 31.0, "minTemp": 21.0, "precipitationSum": 0.0, "windMax": 9.0, "uvMax": 7.0},
]

CLIMATE_DEFAULTS = {
    "averageTemperature": 25.5,
    "annualRainfall": 1200.0,
    # "Tropical savanna" in Hindi
    "koppenGeigerClassification": "उष्णकटिबंधीय सवाना",
}

# ---------- Soil ----------
SOIL_DEFAULTS = {
    "ph": 7.2,
    "topsoilMoisture": 0,
    "subsoilMoisture": 0,
    "soilType": "Clay Loam",
    "soilTemperature": 38.2,
    "soilOrganicCarbon": 8.5,
    "cationExchangeCapacity": 12.2,
    "bulkDensity": 1.4,
    "sandPercent": 30,
    "siltPercent": 40,
    "clayPercent": 30,
    "nitrogen": 25,
    "phosphorus": 30,
    "potassium": 180,
    "electricalConductivity": 0.8,
    "salinity": 2.1,
    "soilHealthScore": 78,
}

# ---------- Crops ----------
RECOMMENDATION_TEXT_DEFAULT = (
    "Based on current soil and weather conditions, "
    "consider suitable crops for your region."
)
CURRENT_SEASON_DEFAULT = "Current Season"

CROP_PROFILES_DEFAULT = [
    {
        "name": "Rice",
        "season": "Kharif",
        "soil": "Clayey to loamy, good water retention",
        "duration": "110-140 days",
        "ph": "5.5 - 7.0",
        "water": "High",
        "notes": "Requires puddled fields and warm temperatures.",
    },
    {
        "name": "Wheat",
        "season": "Rabi",
        "soil": "Well-drained loam to clay loam",
        "duration": "120-150 days",
        "ph": "6.0 - 7.5",
        "water": "Moderate",
        "notes": "India's main cereal crop.",
    },
]

# ---------- Analytics ----------
SOIL_HEALTH_TREND_DEFAULT = [
    {"month": "Jan", "health": 72, "ph": 6.5, "moisture": 18},
    {"month": "Feb", "health": 74, "ph": 6.6, "moisture": 19},
    {"month": "Mar", "health": 76, "ph": 6.7, "moisture": 21},
    {"month": "Apr", "health": 75, "ph": 6.8, "moisture": 23},
    {"month": "May", "health": 78, "ph": 6.8, "moisture": 22},
    {"month": "Jun", "health": 77, "ph": 6.9, "moisture": 24},
]

WEATHER_TRENDS_DEFAULT = [
    {"month": "Jan", "avgTemp": 18, "rainfall": 45, "humidity": 58},
    {"month": "Feb", "avgTemp": 22, "rainfall": 32, "humidity": 62},
    {"month": "Mar", "avgTemp": 25, "rainfall": 28, "humidity": 65},
    {"month": "Apr", "avgTemp": 28, "rainfall": 15, "humidity": 58},
    {"month": "May", "avgTemp": 32, "rainfall": 22, "humidity": 55},
    {"month": "Jun", "avgTemp": 29, "rainfall": 85, "humidity": 72},
]

CROP_YIELDS_DEFAULT = [
    {"crop": "Wheat", "yield": 3200, "target": 3500},
    {"crop": "Rice", "yield": 4100, "target": 4000},
    {"crop": "Cotton", "yield": 1800, "target": 2000},
    {"crop": "Soybean", "yield": 1950, "target": 2100},
    {"crop": "Corn", "yield": 2800, "target": 2600},
]

MONTHLY_METRICS_DEFAULT = [
    {"month": "Jan", "irrigation": 120, "fertilizer": 45, "pesticide": 8},
    {"month": "Feb", "irrigation": 140, "fertilizer": 52, "pesticide": 12},
    {"month": "Mar", "irrigation": 180, "fertilizer": 38, "pesticide": 15},
    {"month": "Apr", "irrigation": 220, "fertilizer": 42, "pesticide": 18},
    {"month": "May", "irrigation": 280, "fertilizer": 35, "pesticide": 22},
    {"month": "Jun", "irrigation": 150, "fertilizer": 48, "pesticide": 10},
]

# ---------- Overview (applied by consumers, not the projector) ----------
OVERVIEW_DISPLAY_DEFAULTS = {
    "district": "Delhi Region",
    "state": "Delhi",
    "current_season": CURRENT_SEASON_DEFAULT,
    "groundwater_index": 75.0,
    "temperature": 24.5,
    "humidity": 65.0,
}

# Minimum score for each soil health band, best first
SOIL_HEALTH_BANDS = [
    (80, "Excellent"),
    (60, "Good"),
    (40, "Fair"),
]
