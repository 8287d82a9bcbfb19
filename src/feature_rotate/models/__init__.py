"""Map models: geometries, features, sources, rotation state and events."""
