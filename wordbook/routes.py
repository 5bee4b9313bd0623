"""Route parsing shared by the app shell and its tests."""

import re
from dataclasses import dataclass
from typing import Optional

UPDATE_ROUTE_PATTERN = re.compile(r"^/update/(\d+)/?$")

NAV_ROUTES = ["/words", "/add", "/stats", "/suggestions"]


@dataclass(frozen=True)
class Route:
    name: str
    word_id: Optional[int] = None


def parse_route(route: str) -> Route:
    """
    Map a route string to a view name.

    "/update/<id>" carries the word id; "/" and unknown routes land on
    the word list.
    """
    route = (route or "/").strip()
    match = UPDATE_ROUTE_PATTERN.match(route)
    if match:
        return Route("update", int(match.group(1)))
    name = route.strip("/") or "words"
    if f"/{name}" not in NAV_ROUTES:
        return Route("words")
    return Route(name)
