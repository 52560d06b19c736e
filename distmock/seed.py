from __future__ import annotations

import hashlib
import logging
from typing import Optional

from .store import Store

logger = logging.getLogger(__name__)


def generate_bytes(seed: str, size: int) -> bytes:
    """Deterministic pseudo-random payload of ``size`` bytes derived from ``seed``."""
    out = bytearray()
    counter = 0
    while len(out) < size:
        out.extend(hashlib.sha256(f"{seed}:{counter}".encode("utf-8")).digest())
        counter += 1
    return bytes(out[:size])


def seed_catalog(store: Store) -> None:
    developer = store.make_user("developer", "Dev Eloper", developer=True, gamer=False)
    gamer = store.make_user("gamer", "Regular Gamer", allow_telemetry=True)
    press = store.make_user("press", "Press Person", press_user=True)
    store.make_api_key(developer.id, "developer-key")
    store.make_api_key(gamer.id, "gamer-key")
    store.make_api_key(press.id, "press-key")

    free_game = store.make_game(developer.id, "Free Sample", classification="game")
    store.make_hosted_upload(
        free_game.id,
        "free-sample-linux.zip",
        generate_bytes("free-sample-linux", 64 * 1024),
        platform_linux=True,
    )
    store.make_hosted_upload(
        free_game.id,
        "free-sample-windows.zip",
        generate_bytes("free-sample-windows", 96 * 1024),
        platform_windows=True,
        platform_mac=True,
    )

    paid_game = store.make_game(developer.id, "Paid Sample", min_price=500)
    build_upload = store.make_build_upload(
        paid_game.id,
        "paid-sample.zip",
        platform_linux=True,
        platform_windows=True,
        platform_mac=True,
    )
    store.make_build_file(
        build_upload.build_id,
        "archive",
        "default",
        "paid-sample.zip",
        generate_bytes("paid-sample-archive", 128 * 1024),
    )
    store.make_build_file(
        build_upload.build_id,
        "signature",
        "default",
        "paid-sample.pwr.sig",
        generate_bytes("paid-sample-signature", 4 * 1024),
    )
    store.make_download_key(gamer.id, paid_game.id)

    private_game = store.make_game(developer.id, "Private Prototype", published=False)
    store.make_hosted_upload(
        private_game.id,
        "prototype.zip",
        generate_bytes("private-prototype", 16 * 1024),
        platform_windows=True,
    )

    store.put_cdn_file("/static/readme.txt", "readme.txt", b"distmock sample catalogue\n")


def seed_sample_data(store: Optional[Store] = None) -> Store:
    store = store or Store()
    seed_catalog(store)
    logger.info(
        "Seeded store (users=%d, games=%d, uploads=%d, builds=%d, cdn_files=%d)",
        len(store.users),
        len(store.games),
        len(store.uploads),
        len(store.builds),
        len(store.cdn_files),
    )
    return store
