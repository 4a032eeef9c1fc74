"""CLI package for interacting with the sensor telemetry relay."""
