"""Tests for library document models."""

from datetime import datetime, timezone

import pytest

from tunebox.domain.library.exceptions import StoreCorruptError
from tunebox.domain.library.models import Library, Track, utc_timestamp


def make_track(track_id: str = "abc", name: str = "Title") -> Track:
    return Track(
        id=track_id,
        name=name,
        artist="Artist",
        filename=f"{track_id}.mp3",
        path=f"/data/{track_id}.mp3",
        mimetype="audio/mpeg",
        size=10,
        date_added="2026-01-01T00:00:00.000Z",
    )


class TestUtcTimestamp:
    def test_millisecond_precision_with_z(self) -> None:
        now = datetime(2026, 10, 18, 12, 30, 45, 123456, tzinfo=timezone.utc)
        assert utc_timestamp(now) == "2026-10-18T12:30:45.123Z"

    def test_defaults_to_now(self) -> None:
        stamp = utc_timestamp()
        assert stamp.endswith("Z")
        assert datetime.fromisoformat(stamp.replace("Z", "+00:00")).tzinfo is not None


class TestTrack:
    def test_to_dict_key_order(self) -> None:
        assert list(make_track().to_dict()) == [
            "id",
            "name",
            "artist",
            "filename",
            "path",
            "mimetype",
            "size",
            "dateAdded",
        ]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        data = make_track().to_dict()
        data["extra"] = True
        assert Track.from_dict(data) == make_track()

    def test_from_dict_missing_required_key(self) -> None:
        data = make_track().to_dict()
        del data["filename"]
        with pytest.raises(StoreCorruptError):
            Track.from_dict(data)


class TestLibrary:
    def test_find_and_remove(self) -> None:
        library = Library(tracks=[make_track("a"), make_track("b")])
        assert library.find("b").id == "b"
        assert library.find("zzz") is None

        removed = library.remove("a")
        assert removed.id == "a"
        assert [t.id for t in library.tracks] == ["b"]
        assert library.remove("a") is None

    def test_from_dict_rejects_wrong_shape(self) -> None:
        for data in ([], {"files": []}, {"tracks": {}}, {"tracks": [1]}):
            with pytest.raises(StoreCorruptError):
                Library.from_dict(data)

    def test_dict_round_trip_preserves_order(self) -> None:
        library = Library(tracks=[make_track("b"), make_track("a")])
        assert Library.from_dict(library.to_dict()) == library
