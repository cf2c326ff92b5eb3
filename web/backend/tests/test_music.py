"""Tests for music library API endpoints."""

import json
from pathlib import PurePath

import pytest

MP3 = "audio/mpeg"


class TestListMusic:
    """Test GET /api/music."""

    def test_empty_library(self, client):
        response = client.get("/api/music")
        assert response.status_code == 200
        assert response.json() == {"tracks": []}

    def test_repeated_reads_are_identical(self, client, upload):
        """Listing twice without a mutation returns the same bytes, order preserved."""
        upload(("One.mp3", b"1", MP3), ("Two.mp3", b"2", MP3))
        upload(("Three.mp3", b"3", MP3))

        first = client.get("/api/music")
        second = client.get("/api/music")
        assert first.content == second.content
        assert [t["name"] for t in first.json()["tracks"]] == ["One", "Two", "Three"]

    def test_corrupt_library_document(self, client, config):
        config.storage.library_path.write_text("[1, 2", encoding="utf-8")
        response = client.get("/api/music")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to read music data"}


class TestUploadMusic:
    """Test POST /api/music/upload."""

    def test_upload_single_file(self, client, upload):
        response = upload(("Artist Name - Song Title.mp3", b"ID3fake", MP3))
        assert response.status_code == 201

        body = response.json()
        assert body["message"] == "Files uploaded successfully"
        assert len(body["tracks"]) == 1

        track = body["tracks"][0]
        assert track["artist"] == "Artist Name"
        assert track["name"] == "Song Title"
        assert track["filename"] == f"{track['id']}.mp3"
        assert track["path"] == f"/data/{track['filename']}"
        assert track["mimetype"] == MP3
        assert track["size"] == len(b"ID3fake")
        assert track["dateAdded"].endswith("Z")

    def test_upload_without_artist(self, upload):
        track = upload(("JustATitle.mp3", b"x", MP3)).json()["tracks"][0]
        assert track["artist"] == "Unknown Artist"
        assert track["name"] == "JustATitle"

    def test_uploaded_bytes_are_served(self, client, upload):
        """The stored file is retrievable at the track's path, byte for byte."""
        content = bytes(range(256)) * 64
        upload(("Band - Tune.flac", content, "audio/flac"))

        track = client.get("/api/music").json()["tracks"][0]
        assert PurePath(track["filename"]).suffix == ".flac"

        response = client.get(track["path"])
        assert response.status_code == 200
        assert response.content == content

    def test_batch_upload_single_save(self, client, upload, config):
        response = upload(
            ("A - One.mp3", b"1", MP3),
            ("B - Two.ogg", b"22", "audio/ogg"),
            ("Three.wav", b"333", "audio/wav"),
        )
        assert response.status_code == 201
        ids = [t["id"] for t in response.json()["tracks"]]
        assert len(set(ids)) == 3

        stored = json.loads(config.storage.library_path.read_text(encoding="utf-8"))
        assert [t["id"] for t in stored["tracks"]] == ids

    def test_no_files(self, client):
        response = client.post("/api/music/upload")
        assert response.status_code == 400
        assert response.json() == {"error": "No files uploaded"}

    def test_wrong_field_name(self, client):
        response = client.post(
            "/api/music/upload", files=[("other", ("a.mp3", b"a", MP3))]
        )
        assert response.status_code == 400
        assert response.json() == {"error": "No files uploaded"}

    def test_empty_file_input(self, client):
        """A form submitted with nothing selected sends one part with no filename."""
        response = client.post(
            "/api/music/upload",
            files=[("musicFiles", ("", b"", "application/octet-stream"))],
        )
        assert response.status_code == 400
        assert response.json() == {"error": "No files uploaded"}

    def test_empty_part_beside_real_file(self, client):
        response = client.post(
            "/api/music/upload",
            files=[
                ("musicFiles", ("", b"", "application/octet-stream")),
                ("musicFiles", ("Real.mp3", b"r", MP3)),
            ],
        )
        assert response.status_code == 201
        assert [t["name"] for t in response.json()["tracks"]] == ["Real"]

    def test_non_audio_rejected(self, client, upload, config):
        response = upload(("notes.txt", b"hello", "text/plain"))
        assert response.status_code == 400
        assert response.json() == {"error": "Only audio files are allowed!"}
        assert client.get("/api/music").json()["tracks"] == []
        assert list(config.storage.media_path.iterdir()) == []

    def test_one_bad_file_rejects_whole_batch(self, client, upload, config):
        response = upload(
            ("Good.mp3", b"ok", MP3),
            ("cover.jpg", b"jpg", "image/jpeg"),
        )
        assert response.status_code == 400
        assert client.get("/api/music").json()["tracks"] == []
        assert list(config.storage.media_path.iterdir()) == []

    def test_oversized_file_rejected(self, client, upload, config):
        too_big = b"\0" * (config.upload.max_file_size + 1)
        response = upload(("Huge.mp3", too_big, MP3))
        assert response.status_code == 400
        assert "too large" in response.json()["error"]
        assert client.get("/api/music").json()["tracks"] == []

    def test_file_at_size_limit_accepted(self, upload, config):
        exact = b"\0" * config.upload.max_file_size
        assert upload(("Exact.mp3", exact, MP3)).status_code == 201

    def test_too_many_files(self, client, upload):
        files = [(f"{i}.mp3", b"x", MP3) for i in range(11)]
        response = upload(*files)
        assert response.status_code == 400
        assert "Too many files" in response.json()["error"]
        assert client.get("/api/music").json()["tracks"] == []

    def test_ten_files_accepted(self, upload):
        files = [(f"{i}.mp3", b"x", MP3) for i in range(10)]
        response = upload(*files)
        assert response.status_code == 201
        assert len(response.json()["tracks"]) == 10

    def test_upload_appends_to_existing(self, client, upload):
        upload(("First.mp3", b"1", MP3))
        upload(("Second.mp3", b"2", MP3))
        names = [t["name"] for t in client.get("/api/music").json()["tracks"]]
        assert names == ["First", "Second"]


class TestDeleteMusic:
    """Test DELETE /api/music/{id}."""

    @pytest.fixture
    def track(self, upload):
        return upload(("Artist Name - Song Title.mp3", b"audio", MP3)).json()["tracks"][0]

    def test_delete_existing(self, client, track):
        response = client.delete(f"/api/music/{track['id']}")
        assert response.status_code == 200
        assert response.json() == {
            "message": "Track deleted successfully",
            "id": track["id"],
            "trackName": "Song Title",
            "artist": "Artist Name",
        }

        assert client.get("/api/music").json()["tracks"] == []
        assert client.get(track["path"]).status_code == 404

    def test_delete_unknown_id(self, client, track):
        before = client.get("/api/music").json()["tracks"]

        response = client.delete("/api/music/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"error": "Track not found"}

        after = client.get("/api/music").json()["tracks"]
        assert before == after
        assert client.get(track["path"]).status_code == 200

    def test_delete_with_missing_file(self, client, track, config):
        """A backing file that is already gone does not block removing the record."""
        (config.storage.media_path / track["filename"]).unlink()

        response = client.delete(f"/api/music/{track['id']}")
        assert response.status_code == 200
        assert client.get("/api/music").json()["tracks"] == []

    def test_delete_leaves_other_tracks(self, client, upload, track):
        other = upload(("Other.mp3", b"o", MP3)).json()["tracks"][0]

        client.delete(f"/api/music/{track['id']}")
        remaining = client.get("/api/music").json()["tracks"]
        assert [t["id"] for t in remaining] == [other["id"]]
        assert client.get(other["path"]).content == b"o"
