from __future__ import annotations

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from distmock.main import create_app
from distmock.store import Store

from tests.helpers import ARCHIVE_CONTENTS, HOSTED_CONTENTS


@pytest.fixture
def catalog() -> SimpleNamespace:
    store = Store()
    owner = store.make_user("owner", "Game Owner", developer=True, gamer=False)
    buyer = store.make_user("buyer", "Paying Customer")
    stranger = store.make_user("stranger", "Someone Else", allow_telemetry=True)
    store.make_api_key(owner.id, "owner-key")
    store.make_api_key(buyer.id, "buyer-key")
    store.make_api_key(stranger.id, "stranger-key")

    free_game = store.make_game(owner.id, "Free Game")
    hosted = store.make_hosted_upload(
        free_game.id,
        "free-game.zip",
        HOSTED_CONTENTS,
        platform_linux=True,
        platform_windows=True,
    )
    odd = store.make_upload(free_game.id, "odd.bin", size=10, storage="external")

    paid_game = store.make_game(owner.id, "Paid Game", min_price=1000)
    build_upload = store.make_build_upload(paid_game.id, "paid-game.zip", platform_mac=True)
    store.make_build_file(build_upload.build_id, "archive", "default", "paid-game.zip", ARCHIVE_CONTENTS)
    store.make_build_file(build_upload.build_id, "signature", "default", "paid-game.sig", b"sig")
    store.make_download_key(buyer.id, paid_game.id)

    bare_upload = store.make_build_upload(paid_game.id, "bare.zip")

    private_game = store.make_game(owner.id, "Private Game", published=False)
    private_upload = store.make_hosted_upload(private_game.id, "private.zip", b"secret")

    return SimpleNamespace(
        store=store,
        owner=owner,
        buyer=buyer,
        stranger=stranger,
        free_game=free_game,
        hosted=hosted,
        odd=odd,
        paid_game=paid_game,
        build_upload=build_upload,
        bare_upload=bare_upload,
        private_game=private_game,
        private_upload=private_upload,
    )


@pytest.fixture
def client(catalog: SimpleNamespace) -> TestClient:
    return TestClient(create_app(catalog.store, chunk_size=64, access_log=False))
