from distmock.models import DownloadKey, Game, Upload, User
from distmock.permissions import can_download_upload, can_view_game

OWNER = User(id=1, username="owner", display_name="Owner")
OTHER = User(id=2, username="other", display_name="Other")


def test_published_game_viewable_by_anyone():
    game = Game(id=1, user_id=OWNER.id, title="Public")
    assert can_view_game(game, OWNER)
    assert can_view_game(game, OTHER)


def test_unpublished_game_viewable_by_owner_only():
    game = Game(id=1, user_id=OWNER.id, title="Hidden", published=False)
    assert can_view_game(game, OWNER)
    assert not can_view_game(game, OTHER)


def test_free_upload_downloadable_when_viewable():
    game = Game(id=1, user_id=OWNER.id, title="Free")
    upload = Upload(id=1, game_id=1, filename="f.zip", size=1)
    assert can_download_upload(upload, game, OTHER)


def test_paid_upload_needs_download_key():
    game = Game(id=1, user_id=OWNER.id, title="Paid", min_price=500)
    upload = Upload(id=1, game_id=1, filename="f.zip", size=1)
    assert can_download_upload(upload, game, OWNER)
    assert not can_download_upload(upload, game, OTHER)
    assert not can_download_upload(upload, game, OTHER, [DownloadKey(id=1, user_id=OTHER.id, game_id=2)])
    assert can_download_upload(upload, game, OTHER, [DownloadKey(id=1, user_id=OTHER.id, game_id=1)])


def test_hidden_paid_upload_not_downloadable_even_with_key():
    game = Game(id=1, user_id=OWNER.id, title="Hidden", min_price=500, published=False)
    upload = Upload(id=1, game_id=1, filename="f.zip", size=1)
    keys = [DownloadKey(id=1, user_id=OTHER.id, game_id=1)]
    assert not can_download_upload(upload, game, OTHER, keys)


def test_upload_of_another_game_is_not_downloadable():
    game = Game(id=1, user_id=OWNER.id, title="Free")
    upload = Upload(id=1, game_id=2, filename="f.zip", size=1)
    assert not can_download_upload(upload, game, OWNER)
