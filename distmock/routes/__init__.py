from ..routing import Dispatcher, not_found
from . import cdn, downloads, games, health, profile


def register_routes(dispatcher: Dispatcher) -> None:
    for module in (health, profile, games, downloads, cdn):
        module.register(dispatcher)
    dispatcher.route_prefix("/", not_found)
