import io
import os

import pytest


def _upload(client, content, filename="Foo.csv", **form):
    data = {"artistFile": (io.BytesIO(content.encode("utf-8")), filename, "text/csv")}
    data.update(form)
    return client.post("/api/upload/artist", data=data, content_type="multipart/form-data")


@pytest.mark.unit
def test_upload_writes_catalog_files(fs_app, fs_client):
    r = _upload(fs_client, "song_name,song_link\nA,http://x\nB,http://y")
    assert r.status_code == 201

    data_dir = fs_app.config["DATA_DIR"]
    assert os.path.exists(os.path.join(data_dir, "Foo.csv"))
    assert fs_client.get("/api/artists").get_json() == ["Foo"]
    assert fs_client.get("/api/artists/Foo/songs").get_json() == [
        {"name": "A", "link": "http://x"},
        {"name": "B", "link": "http://y"},
    ]


@pytest.mark.unit
def test_songs_for_unknown_artist_returns_404(fs_client):
    r = fs_client.get("/api/artists/Nobody/songs")
    assert r.status_code == 404
    assert r.get_json()["error"] == "not_found"


@pytest.mark.unit
def test_upload_with_reserved_artist_name_returns_400(fs_client):
    r = _upload(fs_client, "A,http://x", filename="_artists_list.csv")
    assert r.status_code == 400


@pytest.mark.unit
def test_upload_with_multiline_artist_name_returns_400(fs_app, fs_client):
    r = _upload(fs_client, "A,http://x", artistName="Earth\nWind")
    assert r.status_code == 400
    assert r.get_json()["error"] == "invalid_request"
    assert fs_client.get("/api/artists").get_json() == []
    assert os.listdir(fs_app.config["DATA_DIR"]) == ["_artists_list.csv"]


@pytest.mark.unit
def test_songs_for_path_like_artist_name_returns_400(fs_client):
    r = fs_client.get("/api/artists/a..b/songs")
    assert r.status_code == 400


@pytest.mark.unit
def test_playlist_flow_on_filesystem_backend(fs_client):
    _upload(fs_client, "A,http://x")
    r = fs_client.post("/api/playlist/add", json={"songName": "A", "artistName": "Foo", "userName": "ana"})
    assert r.status_code == 201
    item_id = r.get_json()["id"]

    missing = fs_client.post("/api/playlist/add", json={"songName": "Z", "artistName": "Foo", "userName": "ana"})
    assert missing.status_code == 404

    assert [i["songName"] for i in fs_client.get("/api/playlist").get_json()] == ["A"]
    assert fs_client.delete("/api/playlist/remove/12345").status_code == 404
    assert fs_client.delete(f"/api/playlist/remove/{item_id}").status_code == 200
    assert fs_client.delete("/api/playlist/clear").get_json()["removed"] == 0
    assert fs_client.get("/api/playlist").get_json() == []
