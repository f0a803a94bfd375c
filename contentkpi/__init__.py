"""contentkpi - scoring and issue aggregation for content-intelligence dashboards."""

__version__ = "1.0.0"
