"""
Page-specific view records produced by the projectors.

Views are derived values: recomputed from the raw payload on every request
and never cached. All leaves are populated except in OverviewView, whose
fields stay None when neither the canonical nor a legacy value exists.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional

from src.dashboard.defaults import OVERVIEW_DISPLAY_DEFAULTS, SOIL_HEALTH_BANDS


# ---------- Overview ----------

@dataclass(frozen=True)
class OverviewView:
    district: Optional[str] = None
    state: Optional[str] = None
    current_season: Optional[str] = None
    groundwater_index: Optional[float] = None
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    weather_alert: Optional[str] = None
    soil_health_info: Optional[str] = None

    def with_display_defaults(self) -> "OverviewView":
        """Fill unresolved headline fields with the Overview page's literals."""
        filled = {
            name: value
            for name, value in OVERVIEW_DISPLAY_DEFAULTS.items()
            if getattr(self, name) is None
        }
        return replace(self, **filled)


# ---------- Weather ----------

@dataclass(frozen=True)
class CurrentWeather:
    temperature: float
    humidity: float
    wind_speed: float
    real_feel: float
    wind_gust: float
    pressure: float
    visibility: float
    uv_index: float


@dataclass(frozen=True)
class ForecastDay:
    date: str
    max_temp: float
    min_temp: float
    precipitation_sum: float
    wind_max: float
    uv_max: float


@dataclass(frozen=True)
class ClimateData:
    average_temperature: float
    annual_rainfall: float
    koppen_geiger_classification: str


@dataclass(frozen=True)
class WeatherView:
    current: CurrentWeather
    seven_day_forecast: List[ForecastDay]
    climate_data: ClimateData


# ---------- Soil ----------

@dataclass(frozen=True)
class SoilView:
    ph: float
    topsoil_moisture: float
    subsoil_moisture: float
    soil_type: str
    soil_temperature: float
    organic_carbon: float
    cation_exchange_capacity: float
    bulk_density: float
    # Texture fractions are reported as given; they need not sum to 100
    sand_percent: float
    silt_percent: float
    clay_percent: float
    nitrogen: float
    phosphorus: float
    potassium: float
    electrical_conductivity: float
    salinity: float
    health_score: Optional[float] = None

    @property
    def health_status(self) -> Optional[str]:
        if self.health_score is None:
            return None
        return soil_health_status(self.health_score)


def soil_health_status(score: float) -> str:
    """Band a 0-100 soil health score: Excellent, Good, Fair or Poor."""
    for threshold, label in SOIL_HEALTH_BANDS:
        if score >= threshold:
            return label
    return "Poor"


# ---------- Crops ----------

@dataclass(frozen=True)
class CropProfile:
    name: str
    season: str
    soil: str
    duration: str
    ph: str
    water: str
    notes: str


@dataclass(frozen=True)
class CropView:
    recommendation_text: str
    current_season: str
    profiles: List[CropProfile] = field(default_factory=list)


# ---------- Analytics ----------

@dataclass(frozen=True)
class SoilHealthPoint:
    month: str
    health: float
    ph: float
    moisture: float


@dataclass(frozen=True)
class WeatherTrendPoint:
    month: str
    avg_temp: float
    rainfall: float
    humidity: float


@dataclass(frozen=True)
class CropYieldPoint:
    crop: str
    actual_yield: float
    target: float


@dataclass(frozen=True)
class ResourceUsagePoint:
    month: str
    irrigation: float
    fertilizer: float
    pesticide: float


@dataclass(frozen=True)
class AnalyticsView:
    soil_health_trend: List[SoilHealthPoint]
    weather_trends: List[WeatherTrendPoint]
    crop_yields: List[CropYieldPoint]
    monthly_metrics: List[ResourceUsagePoint]
