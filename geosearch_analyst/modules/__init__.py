"""Feature modules for GeoSearch Analyst."""
