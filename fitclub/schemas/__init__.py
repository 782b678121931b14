"""Request schemas. External names are camelCase; loaded dicts use column names."""
