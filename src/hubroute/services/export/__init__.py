"""Export services for map overlays."""

from .geojson import route_to_feature, routes_to_feature_collection, save_geojson

__all__ = [
    "route_to_feature",
    "routes_to_feature_collection",
    "save_geojson",
]
