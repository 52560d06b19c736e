from ..context import RequestContext
from ..formatters import format_user
from ..routing import Dispatcher


def profile(ctx: RequestContext) -> None:
    def get() -> None:
        user = ctx.require_api_key()
        ctx.write_json({"user": format_user(user)})

    ctx.dispatch({"GET": get})


def register(dispatcher: Dispatcher) -> None:
    dispatcher.route("/profile", profile)
