"""Human-readable formatting for durations and distances."""

METERS_TO_MILES = 0.000621371
METERS_TO_FEET = 3.28084


def format_duration(seconds: float) -> str:
    """Format seconds as "45 sec", "12 mins" or "1h 5m"."""
    seconds = int(round(seconds))
    if seconds < 60:
        return f"{seconds} sec"
    if seconds < 3600:
        minutes = round(seconds / 60)
        return f"{minutes} min{'s' if minutes != 1 else ''}"
    hours = seconds // 3600
    minutes = round((seconds % 3600) / 60)
    return f"{hours}h {minutes}m"


def format_distance_miles(meters: float) -> str:
    """Format metres as feet below 0.1 mi, otherwise miles with one decimal."""
    miles = meters * METERS_TO_MILES
    if miles < 0.1:
        return f"{round(meters * METERS_TO_FEET)} ft"
    return f"{miles:.1f} mi"
