from ..context import RequestContext
from ..routing import Dispatcher


def health(ctx: RequestContext) -> None:
    ctx.dispatch({"GET": lambda: ctx.write_json({"status": "ok"})})


def register(dispatcher: Dispatcher) -> None:
    dispatcher.route("/health", health)
