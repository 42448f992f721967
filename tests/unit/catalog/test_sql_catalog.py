import pytest
from sqlalchemy.exc import IntegrityError

from src.domain.errors import StoreError, ValidationError


@pytest.fixture
def store(db_session):
    from src.domain.catalog import SqlCatalogStore

    return SqlCatalogStore()


@pytest.mark.unit
def test_upsert_creates_artist_and_songs(store):
    from src.database.db_manager import Artist, Song

    result = store.upsert_artist_songs("Foo", [("B", "http://y"), ("A", "http://x")])

    assert result.created_artist is True
    assert result.processed == 2
    assert result.failed == 0
    assert Artist.query.count() == 1
    assert [s.to_json()["name"] for s in store.list_songs("Foo")] == ["A", "B"]
    assert Song.query.count() == 2


@pytest.mark.unit
def test_reupload_updates_link_without_duplicating(store):
    from src.database.db_manager import Song

    store.upsert_artist_songs("Foo", [("A", "http://x"), ("B", "http://y")])
    result = store.upsert_artist_songs("Foo", [("A", "http://new"), ("C", "http://z")])

    assert result.created_artist is False
    assert Song.query.count() == 3
    songs = {s.name: s.link for s in store.list_songs("Foo")}
    assert songs == {"A": "http://new", "B": "http://y", "C": "http://z"}


@pytest.mark.unit
def test_same_song_name_allowed_under_different_artists(store):
    store.upsert_artist_songs("Foo", [("Intro", "http://foo")])
    store.upsert_artist_songs("Bar", [("Intro", "http://bar")])

    assert store.list_artists() == ["Bar", "Foo"]
    assert store.list_songs("Foo")[0].link == "http://foo"
    assert store.list_songs("Bar")[0].link == "http://bar"


@pytest.mark.unit
def test_list_songs_unknown_artist_is_empty(store):
    assert store.list_songs("Nobody") == []


@pytest.mark.unit
def test_list_songs_includes_ids(store, factories):
    song = factories.SongFactory(name="Solo", link="http://solo", artist__name="Single")
    dto = store.list_songs("Single")[0]
    assert dto.to_json() == {"id": song.id, "name": "Solo", "link": "http://solo"}


@pytest.mark.unit
def test_row_level_failure_is_logged_and_batch_continues(store, monkeypatch, caplog):
    original = store._upsert_song

    def flaky(artist_id, song_name, song_link):
        if song_name == "Bad":
            raise IntegrityError("INSERT", {}, Exception("boom"))
        return original(artist_id, song_name, song_link)

    monkeypatch.setattr(store, "_upsert_song", flaky)
    result = store.upsert_artist_songs("Foo", [("A", "http://a"), ("Bad", "http://b"), ("C", "http://c")])

    assert result.processed == 2
    assert result.failed == 1
    assert [s.name for s in store.list_songs("Foo")] == ["A", "C"]
    assert any("Bad" in record.getMessage() for record in caplog.records)


@pytest.mark.unit
def test_unexpected_error_rolls_back_whole_upload(store, monkeypatch):
    from src.database.db_manager import Artist, Song

    calls = {"n": 0}
    original = store._upsert_song

    def explode_second(artist_id, song_name, song_link):
        calls["n"] += 1
        if calls["n"] == 2:
            raise RuntimeError("disk on fire")
        return original(artist_id, song_name, song_link)

    monkeypatch.setattr(store, "_upsert_song", explode_second)
    with pytest.raises(StoreError):
        store.upsert_artist_songs("Foo", [("A", "http://a"), ("B", "http://b")])

    assert Artist.query.count() == 0
    assert Song.query.count() == 0


@pytest.mark.unit
def test_fallback_upsert_for_dialects_without_on_conflict(store, monkeypatch):
    from src.domain.catalog import database as catalog_database

    monkeypatch.setattr(catalog_database, "_dialect_insert", lambda name: None)
    store.upsert_artist_songs("Foo", [("A", "http://x")])
    store.upsert_artist_songs("Foo", [("A", "http://y")])

    songs = store.list_songs("Foo")
    assert [(s.name, s.link) for s in songs] == [("A", "http://y")]


@pytest.mark.unit
def test_invalid_artist_name_rejected(store):
    with pytest.raises(ValidationError):
        store.upsert_artist_songs("  ", [("A", "http://x")])


@pytest.mark.unit
def test_slashes_and_dots_are_ordinary_artist_characters(store):
    result = store.upsert_artist_songs("AC/DC", [("A", "http://x")])
    assert result.created_artist is True
    assert [s.name for s in store.list_songs("AC/DC")] == ["A"]
    assert store.list_songs("..") == []


@pytest.mark.unit
def test_ping_succeeds(store):
    store.ping()
