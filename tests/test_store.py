import pytest

from distmock.models import get_build_file
from distmock.seed import generate_bytes, seed_sample_data
from distmock.store import Store


def test_lookups(catalog):
    store = catalog.store
    assert store.find_game(catalog.free_game.id) == catalog.free_game
    assert store.find_upload(catalog.hosted.id) == catalog.hosted
    assert store.find_build(catalog.build_upload.build_id).upload_id == catalog.build_upload.id
    assert store.find_user_by_api_key("buyer-key") == catalog.buyer


def test_missing_lookups_return_none(catalog):
    store = catalog.store
    assert store.find_game(999) is None
    assert store.find_upload(999) is None
    assert store.find_build(999) is None
    assert store.find_cdn_file("/nope") is None
    assert store.find_user_by_api_key("nope") is None


def test_uploads_listed_in_id_order(catalog):
    uploads = catalog.store.list_uploads_by_game(catalog.paid_game.id)
    assert [upload.id for upload in uploads] == [catalog.build_upload.id, catalog.bare_upload.id]
    assert catalog.store.list_uploads_by_game(999) == []


def test_hosted_upload_registers_cdn_file(catalog):
    cdn_file = catalog.store.find_cdn_file(catalog.hosted.cdn_path)
    assert catalog.hosted.cdn_path == f"/uploads/{catalog.hosted.id}/free-game.zip"
    assert cdn_file.filename == "free-game.zip"
    assert cdn_file.size == catalog.hosted.size == 500


def test_build_files(catalog):
    build = catalog.store.find_build(catalog.build_upload.build_id)
    archive = get_build_file(build, "archive", "default")
    assert archive.cdn_path == f"/builds/{build.id}/archive/default/paid-game.zip"
    assert catalog.store.find_cdn_file(archive.cdn_path).size == 300
    assert get_build_file(build, "archive", "nonexistent") is None


def test_ids_are_allocated_per_kind():
    store = Store()
    user = store.make_user("u")
    game = store.make_game(user.id, "g")
    assert (user.id, game.id) == (1, 1)
    assert store.make_user("v").id == 2


def test_population_rejects_dangling_references():
    store = Store()
    with pytest.raises(KeyError):
        store.make_game(1, "orphan")
    with pytest.raises(KeyError):
        store.make_upload(1, "orphan.zip")
    with pytest.raises(KeyError):
        store.make_build_file(1, "archive", "default", "a.zip", b"")


def test_duplicate_api_key_rejected():
    store = Store()
    user = store.make_user("u")
    store.make_api_key(user.id, "k")
    with pytest.raises(ValueError):
        store.make_api_key(user.id, "k")


def test_generate_bytes_is_deterministic():
    assert generate_bytes("seed", 100) == generate_bytes("seed", 100)
    assert generate_bytes("seed", 100) != generate_bytes("other", 100)
    assert len(generate_bytes("seed", 1000)) == 1000


def test_sample_data():
    store = seed_sample_data()
    assert store.find_user_by_api_key("gamer-key").username == "gamer"
    assert len(store.games) == 3
    for upload in store.uploads.values():
        if upload.storage == "build":
            build = store.find_build(upload.build_id)
            assert get_build_file(build, "archive", "default") is not None
        else:
            assert store.find_cdn_file(upload.cdn_path).size == upload.size
