from ..context import RequestContext
from ..routing import PREFIX_PARAM, Dispatcher

CDN_MOUNT = "/@cdn"


def cdn_asset(ctx: RequestContext) -> None:
    def get() -> None:
        path = ctx.request.path_params.get(PREFIX_PARAM) or ""
        ctx.serve_asset(ctx.find_cdn_file(path))

    ctx.dispatch({"GET": get})


def register(dispatcher: Dispatcher) -> None:
    dispatcher.route_prefix(CDN_MOUNT, cdn_asset)
