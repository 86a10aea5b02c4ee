from weather_informer.schemas.forecast import WeatherCondition

# Provider condition groups -> theme categories.
# Rare groups map to the closest visual match.
_CONDITION_MAP = {
    "Clear": WeatherCondition.CLEAR,
    "Clouds": WeatherCondition.CLOUDS,
    "Rain": WeatherCondition.RAIN,
    "Drizzle": WeatherCondition.DRIZZLE,
    "Thunderstorm": WeatherCondition.THUNDERSTORM,
    "Snow": WeatherCondition.SNOW,
    "Mist": WeatherCondition.MIST,
    "Fog": WeatherCondition.FOG,
    "Haze": WeatherCondition.HAZE,
    "Smoke": WeatherCondition.FOG,
    "Dust": WeatherCondition.HAZE,
    "Sand": WeatherCondition.HAZE,
    "Ash": WeatherCondition.FOG,
    "Squall": WeatherCondition.THUNDERSTORM,
    "Tornado": WeatherCondition.THUNDERSTORM,
}


def map_owm_condition(condition: str) -> WeatherCondition:
    """Map an OpenWeatherMap `weather.main` value to a theme category."""
    return _CONDITION_MAP.get(condition, WeatherCondition.DEFAULT)
