"""
Location-fragment router.

Maps ``#/...`` fragments to one of five views. Anything unrecognized falls
back to the home view.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

VEHICLE_PREFIX = "/vehicle/"


class View(str, Enum):
    HOME = "home"
    VEHICLE_DETAIL = "vehicle-detail"
    ADMIN = "admin"
    UPLOAD = "upload"
    DOWNLOAD = "download"


STATIC_ROUTES = {
    "/admin": View.ADMIN,
    "/upload": View.UPLOAD,
    "/download": View.DOWNLOAD,
}


@dataclass(frozen=True)
class Route:
    view: View
    vehicle_id: Optional[str] = None


HOME = Route(View.HOME)


def resolve(fragment: Optional[str]) -> Route:
    """Resolve a location fragment (with or without the leading ``#``)."""
    path = (fragment or "").lstrip("#") or "/"

    if path.startswith(VEHICLE_PREFIX):
        vehicle_id = path.split("/")[2]
        if not vehicle_id:
            return HOME
        return Route(View.VEHICLE_DETAIL, vehicle_id)

    view = STATIC_ROUTES.get(path)
    return Route(view) if view else HOME


def fragment_for(route: Route) -> str:
    if route.view == View.VEHICLE_DETAIL:
        return f"#{VEHICLE_PREFIX}{route.vehicle_id}"
    if route.view == View.HOME:
        return "#/"
    return f"#/{route.view.value}"
