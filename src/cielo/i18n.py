"""Simple two-language (en/es) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "phase_new": {
        "en": "new moon",
        "es": "luna nueva",
    },
    "phase_waxing_crescent": {
        "en": "waxing crescent",
        "es": "luna creciente",
    },
    "phase_first_quarter": {
        "en": "first quarter",
        "es": "cuarto creciente",
    },
    "phase_waxing_gibbous": {
        "en": "waxing gibbous",
        "es": "gibosa creciente",
    },
    "phase_full": {
        "en": "full moon",
        "es": "luna llena",
    },
    "phase_waning_gibbous": {
        "en": "waning gibbous",
        "es": "gibosa menguante",
    },
    "phase_last_quarter": {
        "en": "last quarter",
        "es": "cuarto menguante",
    },
    "phase_waning_crescent": {
        "en": "waning crescent",
        "es": "luna menguante",
    },
    "cardinal_n": {"en": "N", "es": "N"},
    "cardinal_e": {"en": "E", "es": "E"},
    "cardinal_s": {"en": "S", "es": "S"},
    "cardinal_w": {"en": "W", "es": "O"},
    "sky_summary": {
        "en": "{place} · {count} stars (mag < {limit:.1f})",
        "es": "{place} · {count} estrellas (mag < {limit:.1f})",
    },
    "sunrise": {
        "en": "sunrise: {time}",
        "es": "salida: {time}",
    },
    "sunset": {
        "en": "sunset: {time}",
        "es": "puesta: {time}",
    },
    "solar_noon": {
        "en": "solar noon: {time}",
        "es": "mediodía: {time}",
    },
    "event_azimuth": {
        "en": "{line} · az {az:.0f}°",
        "es": "{line} · az {az:.0f}°",
    },
    "sun_max_altitude": {
        "en": "max altitude: {alt:.0f}°",
        "es": "altura máxima: {alt:.0f}°",
    },
    "moonrise": {
        "en": "moonrise: {time}",
        "es": "salida: {time}",
    },
    "moonset": {
        "en": "moonset: {time}",
        "es": "puesta: {time}",
    },
    "moon_position": {
        "en": "azimuth: {az:.1f}° · altitude: {alt:.1f}°",
        "es": "azimut: {az:.1f}° · altitud: {alt:.1f}°",
    },
    "moon_visible": {
        "en": "visible",
        "es": "visible",
    },
    "moon_below_horizon": {
        "en": "below the horizon",
        "es": "bajo el horizonte",
    },
    "moon_illumination": {
        "en": "{pct:.0f}% illuminated",
        "es": "{pct:.0f}% iluminada",
    },
    "view_sky": {
        "en": "sky",
        "es": "cielo",
    },
    "view_sky_antipode": {
        "en": "sky · antipode",
        "es": "cielo · antípoda",
    },
    "view_sun_east": {
        "en": "sun · morning",
        "es": "sol · mañana",
    },
    "view_sun_west": {
        "en": "sun · afternoon",
        "es": "sol · tarde",
    },
    "view_moon_phase": {
        "en": "moon phase",
        "es": "fase lunar",
    },
    "view_moon": {
        "en": "moon position",
        "es": "posición lunar",
    },
    "not_available": {
        "en": "n/a",
        "es": "n/a",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
