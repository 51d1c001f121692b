"""GeoSearch Analyst -- grounded keyword analysis with robust response extraction."""

__version__ = "1.0.0"
