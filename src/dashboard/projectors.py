"""
Projectors: pure functions from the raw all-data payload to one page view.

Every field is resolved through `resolve()` in priority order:
    1. canonical nested path (`dashboardData...`, `cropRecommendation...`,
       `analyticsData...`)
    2. legacy flat aliases at the document root, then older nested aliases
    3. the literal in `src.dashboard.defaults`

`project_overview` stops after step 2 and leaves unresolved fields as None;
consumers call `OverviewView.with_display_defaults()` when they need
literals.

Projectors never read preferences and never mutate the payload. A payload
of None, {} or any non-mapping yields fully defaulted views.
"""

import logging
from typing import Any, Callable, List, Mapping, Optional, Sequence, TypeVar

from src.dashboard import defaults
from src.dashboard.resolver import Path, first_present, resolve
from src.dashboard.views import (
    AnalyticsView, ClimateData, CropProfile, CropView, CropYieldPoint,
    CurrentWeather, ForecastDay, OverviewView, ResourceUsagePoint,
    SoilHealthPoint, SoilView, WeatherTrendPoint, WeatherView,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DASHBOARD = "dashboardData"
WEATHER_CURRENT = "dashboardData.weatherData.current"
SOIL = "dashboardData.soilData"
CLIMATE = "dashboardData.climateData"
ANALYTICS = "analyticsData"


def _field(entry: Mapping, key: str, default: Any) -> Any:
    value = entry.get(key)
    return default if value is None else value


def _records(
    payload: Any,
    paths: Sequence[Path],
    default: List[dict],
    build: Callable[[Mapping], T],
) -> List[T]:
    """
    Resolve a list-valued field and build one record per entry.

    A resolved value that is not a list is ignored in favour of `default`.
    Entries that are not mappings are skipped.
    """
    value = first_present(payload, paths)
    if value is not None and not isinstance(value, list):
        logger.warning(
            "Expected a list at %s, got %s; using defaults",
            paths[0], type(value).__name__,
        )
        value = None
    if value is None:
        value = default
    return [build(entry) for entry in value if isinstance(entry, Mapping)]


def project_overview(payload: Any) -> OverviewView:
    """Headline values for the Overview page. No literal defaults applied."""
    view = OverviewView(
        district=first_present(payload, [f"{DASHBOARD}.district", "district"]),
        state=first_present(payload, [f"{DASHBOARD}.state", "state"]),
        current_season=first_present(
            payload, [f"{DASHBOARD}.currentSeason", "currentSeason", "season"],
        ),
        groundwater_index=first_present(
            payload, [f"{DASHBOARD}.groundwaterIndex", "groundwaterIndex", "groundwater"],
        ),
        temperature=first_present(
            payload, [f"{WEATHER_CURRENT}.temperature", "temperature", "temp"],
        ),
        humidity=first_present(payload, [f"{WEATHER_CURRENT}.humidity", "humidity"]),
        weather_alert=first_present(payload, ["weatherAlert", "weather_alert"]),
        soil_health_info=first_present(
            payload, ["soilHealthInfo", "soil_health", "soilInfo"],
        ),
    )
    logger.debug("Overview data mapping: %s", view)
    return view


def _forecast_day(entry: Mapping) -> ForecastDay:
    return ForecastDay(
        date=_field(entry, "date", ""),
        max_temp=_field(entry, "maxTemp", 0.0),
        min_temp=_field(entry, "minTemp", 0.0),
        precipitation_sum=_field(entry, "precipitationSum", 0.0),
        wind_max=_field(entry, "windMax", 0.0),
        uv_max=_field(entry, "uvMax", 0.0),
    )


def project_weather(payload: Any) -> WeatherView:
    """Current conditions, 7-day forecast and climate summary."""
    cur = defaults.WEATHER_CURRENT_DEFAULTS
    current = CurrentWeather(
        temperature=resolve(
            payload, f"{WEATHER_CURRENT}.temperature", "temperature", "temp",
            default=cur["temperature"],
        ),
        humidity=resolve(payload, f"{WEATHER_CURRENT}.humidity", "humidity", default=cur["humidity"]),
        wind_speed=resolve(payload, f"{WEATHER_CURRENT}.windSpeed", "windSpeed", default=cur["windSpeed"]),
        real_feel=resolve(payload, f"{WEATHER_CURRENT}.realFeel", "realFeel", default=cur["realFeel"]),
        wind_gust=resolve(payload, f"{WEATHER_CURRENT}.windGust", "windGust", default=cur["windGust"]),
        pressure=resolve(payload, f"{WEATHER_CURRENT}.pressure", "pressure", default=cur["pressure"]),
        visibility=resolve(payload, f"{WEATHER_CURRENT}.visibility", "visibility", default=cur["visibility"]),
        uv_index=resolve(payload, f"{WEATHER_CURRENT}.uvIndex", "uvIndex", default=cur["uvIndex"]),
    )

    forecast = _records(
        payload,
        [f"{DASHBOARD}.weatherData.sevenDayForecast", "sevenDayForecast"],
        defaults.SEVEN_DAY_FORECAST_DEFAULT,
        _forecast_day,
    )

    clim = defaults.CLIMATE_DEFAULTS
    climate = ClimateData(
        average_temperature=resolve(
            payload, f"{CLIMATE}.averageTemperature", "averageTemperature",
            default=clim["averageTemperature"],
        ),
        annual_rainfall=resolve(
            payload, f"{CLIMATE}.annualRainfall", "annualRainfall",
            default=clim["annualRainfall"],
        ),
        koppen_geiger_classification=resolve(
            payload, f"{CLIMATE}.koppenGeigerClassification", "koppenGeigerClassification",
            default=clim["koppenGeigerClassification"],
        ),
    )

    view = WeatherView(current=current, seven_day_forecast=forecast, climate_data=climate)
    logger.debug(
        "Weather data mapping: temperature=%s, humidity=%s, forecast_days=%d, climate=%s",
        current.temperature, current.humidity, len(forecast), climate,
    )
    return view


def _soil(payload: Any, key: str) -> Any:
    return resolve(payload, f"{SOIL}.{key}", key, default=defaults.SOIL_DEFAULTS[key])


def _legacy_text(value: Any) -> str:
    """Render a scalar the way the dashboard front end displays it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _soil_type(payload: Any) -> str:
    canonical = first_present(payload, [f"{SOIL}.soilType"])
    if canonical is not None:
        return canonical
    legacy = first_present(payload, ["soilType"])
    if legacy is not None:
        # Older responses sent soil type codes as numbers
        return _legacy_text(legacy)
    return defaults.SOIL_DEFAULTS["soilType"]


def project_soil(payload: Any) -> SoilView:
    """Soil chemistry, texture and nutrient levels."""
    view = SoilView(
        ph=_soil(payload, "ph"),
        topsoil_moisture=_soil(payload, "topsoilMoisture"),
        subsoil_moisture=_soil(payload, "subsoilMoisture"),
        soil_type=_soil_type(payload),
        soil_temperature=_soil(payload, "soilTemperature"),
        organic_carbon=_soil(payload, "soilOrganicCarbon"),
        cation_exchange_capacity=_soil(payload, "cationExchangeCapacity"),
        bulk_density=_soil(payload, "bulkDensity"),
        sand_percent=_soil(payload, "sandPercent"),
        silt_percent=_soil(payload, "siltPercent"),
        clay_percent=_soil(payload, "clayPercent"),
        nitrogen=_soil(payload, "nitrogen"),
        phosphorus=_soil(payload, "phosphorus"),
        potassium=_soil(payload, "potassium"),
        electrical_conductivity=_soil(payload, "electricalConductivity"),
        salinity=_soil(payload, "salinity"),
        health_score=_soil(payload, "soilHealthScore"),
    )
    logger.debug(
        "Soil data mapping: ph=%s, organic_carbon=%s, soil_type=%s, health=%s, npk=%s/%s/%s",
        view.ph, view.organic_carbon, view.soil_type, view.health_score,
        view.nitrogen, view.phosphorus, view.potassium,
    )
    return view


def _crop_profile(entry: Mapping) -> CropProfile:
    return CropProfile(
        name=_field(entry, "name", ""),
        season=_field(entry, "season", ""),
        soil=_field(entry, "soil", ""),
        duration=_field(entry, "duration", ""),
        ph=_field(entry, "ph", ""),
        water=_field(entry, "water", ""),
        notes=_field(entry, "notes", ""),
    )


def project_crops(payload: Any) -> CropView:
    """Recommendation text, season and crop profiles."""
    view = CropView(
        recommendation_text=resolve(
            payload,
            "cropRecommendation.recommendationText",
            "recommendationText",
            "cropData.recommendationText",
            default=defaults.RECOMMENDATION_TEXT_DEFAULT,
        ),
        current_season=resolve(
            payload,
            f"{DASHBOARD}.currentSeason",
            "currentSeason",
            "season",
            "cropData.currentSeason",
            default=defaults.CURRENT_SEASON_DEFAULT,
        ),
        profiles=_records(
            payload,
            ["cropProfiles", "cropData.profiles"],
            defaults.CROP_PROFILES_DEFAULT,
            _crop_profile,
        ),
    )
    first_crop: Optional[str] = view.profiles[0].name if view.profiles else None
    logger.debug(
        "Crops data mapping: season=%s, profile_count=%d, first_crop=%s",
        view.current_season, len(view.profiles), first_crop,
    )
    return view


def project_analytics(payload: Any) -> AnalyticsView:
    """Six-month trend series for the Analytics page."""
    view = AnalyticsView(
        soil_health_trend=_records(
            payload,
            [f"{ANALYTICS}.soilHealthTrend", "soilHealthTrend"],
            defaults.SOIL_HEALTH_TREND_DEFAULT,
            lambda e: SoilHealthPoint(
                month=_field(e, "month", ""),
                health=_field(e, "health", 0),
                ph=_field(e, "ph", 0.0),
                moisture=_field(e, "moisture", 0),
            ),
        ),
        weather_trends=_records(
            payload,
            [f"{ANALYTICS}.weatherTrends", "weatherTrends"],
            defaults.WEATHER_TRENDS_DEFAULT,
            lambda e: WeatherTrendPoint(
                month=_field(e, "month", ""),
                avg_temp=_field(e, "avgTemp", 0),
                rainfall=_field(e, "rainfall", 0),
                humidity=_field(e, "humidity", 0),
            ),
        ),
        crop_yields=_records(
            payload,
            [f"{ANALYTICS}.cropYields", "cropYields"],
            defaults.CROP_YIELDS_DEFAULT,
            lambda e: CropYieldPoint(
                crop=_field(e, "crop", ""),
                actual_yield=_field(e, "yield", 0),
                target=_field(e, "target", 0),
            ),
        ),
        monthly_metrics=_records(
            payload,
            [f"{ANALYTICS}.monthlyMetrics", "monthlyMetrics"],
            defaults.MONTHLY_METRICS_DEFAULT,
            lambda e: ResourceUsagePoint(
                month=_field(e, "month", ""),
                irrigation=_field(e, "irrigation", 0),
                fertilizer=_field(e, "fertilizer", 0),
                pesticide=_field(e, "pesticide", 0),
            ),
        ),
    )
    logger.debug(
        "Analytics data mapping: soil_months=%d, weather_months=%d, crops=%d, metric_months=%d",
        len(view.soil_health_trend), len(view.weather_trends),
        len(view.crop_yields), len(view.monthly_metrics),
    )
    return view


PROJECTORS = {
    "overview": project_overview,
    "weather": project_weather,
    "soil": project_soil,
    "crops": project_crops,
    "analytics": project_analytics,
}
