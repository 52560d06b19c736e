import logging

from ..context import RequestContext
from ..errors import abort
from ..models import STORAGE_BUILD, STORAGE_HOSTED, Upload, User, get_build_file
from ..permissions import can_download_upload
from ..routing import Dispatcher

logger = logging.getLogger(__name__)


def _require_download(ctx: RequestContext, user: User, upload: Upload) -> None:
    game = ctx.find_game(upload.game_id)
    keys = ctx.store.list_download_keys(user.id)
    ctx.require_authorized(can_download_upload(upload, game, user, keys))


def upload_download(ctx: RequestContext) -> None:
    def get() -> None:
        user = ctx.require_api_key()
        upload = ctx.find_upload(ctx.path_int("id"))
        _require_download(ctx, user, upload)

        if upload.storage == STORAGE_HOSTED:
            ctx.serve_asset(ctx.find_cdn_file(upload.cdn_path))
        elif upload.storage == STORAGE_BUILD:
            if upload.build_id is None:
                abort(404, "no build for upload")
            build = ctx.find_build(upload.build_id)
            archive = get_build_file(build, "archive", "default")
            if archive is None:
                abort(404, "no archive for build")
            ctx.serve_asset(ctx.find_cdn_file(archive.cdn_path))
        else:
            abort(500, "unsupported storage")

    ctx.dispatch({"GET": get})


def build_download(ctx: RequestContext) -> None:
    def get() -> None:
        user = ctx.require_api_key()
        build = ctx.find_build(ctx.path_int("id"))
        upload = ctx.find_upload(build.upload_id)
        _require_download(ctx, user, upload)

        file_type = ctx.path_string("type")
        subtype = ctx.path_string("subtype")
        build_file = get_build_file(build, file_type, subtype)
        if build_file is None:
            logger.info("No build file %s/%s for build %d", file_type, subtype, build.id)
            abort(404, f"no {file_type}/{subtype} build file")
        ctx.serve_asset(ctx.find_cdn_file(build_file.cdn_path))

    ctx.dispatch({"GET": get})


def register(dispatcher: Dispatcher) -> None:
    dispatcher.route("/uploads/{id}/download", upload_download)
    dispatcher.route("/builds/{id}/download/{type}/{subtype}", build_download)
