import uuid

from ..context import RequestContext
from ..formatters import format_game, format_uploads
from ..models import Game
from ..permissions import can_view_game
from ..routing import Dispatcher


def _viewable_game(ctx: RequestContext) -> Game:
    user = ctx.require_api_key()
    game = ctx.find_game(ctx.path_int("id"))
    ctx.require_authorized(can_view_game(game, user))
    return game


def game_detail(ctx: RequestContext) -> None:
    def get() -> None:
        game = _viewable_game(ctx)
        ctx.write_json({"game": format_game(game)})

    ctx.dispatch({"GET": get})


def game_uploads(ctx: RequestContext) -> None:
    def get() -> None:
        game = _viewable_game(ctx)
        uploads = ctx.store.list_uploads_by_game(game.id)
        ctx.write_json({"uploads": format_uploads(uploads)})

    ctx.dispatch({"GET": get})


def download_sessions(ctx: RequestContext) -> None:
    def post() -> None:
        _viewable_game(ctx)
        ctx.write_json({"uuid": str(uuid.uuid4())})

    ctx.dispatch({"POST": post})


def register(dispatcher: Dispatcher) -> None:
    dispatcher.route("/games/{id}", game_detail)
    dispatcher.route("/games/{id}/uploads", game_uploads)
    dispatcher.route("/games/{id}/download-sessions", download_sessions)
