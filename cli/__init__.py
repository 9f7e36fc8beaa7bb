"""Command-line interface for PurpleAir AQI readings."""
