"""Console appenders."""
