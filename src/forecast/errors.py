"""Exception types raised by the forecast engine and its collaborators."""


class WeatherError(Exception):
    """Base class for forecast errors."""


class CacheUnavailableError(WeatherError):
    """Prediction cache could not be reached, read or written."""


class PlanetConfigError(WeatherError):
    """Planet configuration file is missing or malformed."""
