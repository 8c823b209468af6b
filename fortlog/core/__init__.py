"""Core logging engine: levels, configuration, attribute encoding and rendering."""
