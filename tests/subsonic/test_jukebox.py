"""Tests for the Jukebox controller.

Validates the jukeboxControl query each operation sends, status parsing
of the response, and the exclusive client binding.
"""

import httpx
import pytest

from subsonic_remote.client import SubsonicClient
from subsonic_remote.exceptions import (
    ControllerBusyError,
    SubsonicAuthorizationError,
    SubsonicParseError,
)
from subsonic_remote.jukebox import Jukebox, JukeboxStatus
from subsonic_remote.models import Song


@pytest.fixture
def jukebox(client: SubsonicClient, fixtures, respond):
    respond(fixtures["jukebox_status"])
    with client.jukebox() as jukebox:
        yield jukebox


class TestActions:
    """Each operation maps to one jukeboxControl action."""

    @pytest.mark.parametrize(
        "method,action",
        [
            ("status", "status"),
            ("play", "start"),
            ("stop", "stop"),
            ("clear", "clear"),
            ("shuffle", "shuffle"),
        ],
    )
    def test_simple_actions(self, jukebox, sent_params, sent_url, method, action):
        status = getattr(jukebox, method)()

        assert sent_url().endswith("/rest/jukeboxControl")
        assert sent_params() == [("action", action)]
        assert status == JukeboxStatus(index=7, playing=True, volume=0.9, position=67)

    def test_skip_to_sends_index(self, jukebox, sent_params):
        jukebox.skip_to(5)

        assert sent_params() == [("action", "skip"), ("index", "5")]

    def test_skip_past_end_is_not_validated(self, jukebox, sent_params):
        jukebox.skip_to(10_000)

        assert ("index", "10000") in sent_params()

    def test_add_song(self, jukebox, sent_params):
        jukebox.add(Song(id=1887, title="トリコリコPLEASE!!"))

        assert sent_params() == [("action", "add"), ("id", "1887")]

    def test_add_id(self, jukebox, sent_params):
        jukebox.add_id(42)

        assert sent_params() == [("action", "add"), ("id", "42")]

    def test_add_all_ids_preserves_order(self, jukebox, sent_params):
        jukebox.add_all_ids([3, 7, 9])

        assert sent_params() == [("action", "add"), ("id", "3"), ("id", "7"), ("id", "9")]

    def test_add_all_ids_keeps_duplicates(self, jukebox, sent_params):
        jukebox.add_all_ids([9, 3, 9])

        assert [v for k, v in sent_params() if k == "id"] == ["9", "3", "9"]

    def test_add_all_songs(self, jukebox, sent_params):
        songs = [Song(id=12, title="b"), Song(id=4, title="a")]

        jukebox.add_all(songs)

        assert sent_params() == [("action", "add"), ("id", "12"), ("id", "4")]

    def test_remove_id_sends_index_not_id(self, jukebox, sent_params):
        jukebox.remove_id(5)

        params = sent_params()
        assert params == [("action", "remove"), ("index", "5")]
        assert "id" not in dict(params)

    def test_remove_song_sends_its_id_as_index(self, jukebox, sent_params):
        jukebox.remove(Song(id=2, title="x"))

        assert sent_params() == [("action", "remove"), ("index", "2")]

    def test_set_volume(self, jukebox, sent_params):
        jukebox.set_volume(0.25)

        assert sent_params() == [("action", "setGain"), ("gain", "0.25")]

    def test_set_volume_is_not_range_checked(self, jukebox, sent_params):
        jukebox.set_volume(3.0)

        assert ("gain", "3.0") in sent_params()

    def test_each_call_is_a_single_request(self, jukebox, client):
        jukebox.play()
        jukebox.stop()

        assert client.client.get.call_count == 2


class TestPlaylist:
    """Test the ``get`` action."""

    def test_playlist(self, client, fixtures, respond, sent_params):
        respond(fixtures["jukebox_playlist"])

        with client.jukebox() as jukebox:
            queue = jukebox.playlist()

        assert sent_params() == [("action", "get")]
        assert queue.status.volume == 0.75
        assert queue.status.playing is False
        assert [s.title for s in queue.songs] == ["トリコリコPLEASE!!", "ときめき分類学"]

    def test_playlist_without_payload_fails(self, client, fixtures, respond):
        respond(fixtures["jukebox_status"])

        with client.jukebox() as jukebox:
            with pytest.raises(SubsonicParseError) as exc_info:
                jukebox.playlist()

        assert exc_info.value.field == "jukeboxPlaylist"


class TestErrors:
    """Errors propagate unchanged; nothing is retried."""

    def test_status_missing_from_response(self, client, fixtures, respond):
        respond(fixtures["ping_success"])

        with client.jukebox() as jukebox:
            with pytest.raises(SubsonicParseError) as exc_info:
                jukebox.play()

        assert exc_info.value.field == "jukeboxStatus"

    def test_malformed_status(self, client, respond):
        respond(
            {
                "subsonic-response": {
                    "status": "ok",
                    "jukeboxStatus": {"currentIndex": 0, "playing": "yes", "gain": 0.5, "position": 0},
                }
            }
        )

        with client.jukebox() as jukebox:
            with pytest.raises(SubsonicParseError) as exc_info:
                jukebox.status()

        assert exc_info.value.field == "playing"

    def test_server_error(self, client, fixtures, respond):
        get = respond(fixtures["jukebox_not_authorized"])

        with client.jukebox() as jukebox:
            with pytest.raises(SubsonicAuthorizationError) as exc_info:
                jukebox.play()

        assert exc_info.value.code == 50
        get.assert_called_once()

    def test_transport_error_propagates(self, client, mocker):
        client.client.get = mocker.MagicMock(side_effect=httpx.ConnectTimeout("timed out"))

        with client.jukebox() as jukebox:
            with pytest.raises(httpx.ConnectTimeout):
                jukebox.stop()

        client.client.get.assert_called_once()


class TestBinding:
    """Only one controller may hold a client at a time."""

    def test_second_controller_is_refused(self, client):
        first = Jukebox(client)

        with pytest.raises(ControllerBusyError):
            Jukebox(client)

        first.close()

    def test_release_allows_a_new_controller(self, client, fixtures, respond):
        respond(fixtures["jukebox_status"])

        with client.jukebox():
            pass

        with client.jukebox() as jukebox:
            assert jukebox.status().playing is True

    def test_released_controller_is_unusable(self, client, fixtures, respond):
        get = respond(fixtures["jukebox_status"])
        jukebox = client.jukebox()
        jukebox.close()

        with pytest.raises(ControllerBusyError):
            jukebox.play()

        get.assert_not_called()

    def test_controller_unusable_after_client_close(self, client, fixtures, respond):
        respond(fixtures["jukebox_status"])
        jukebox = client.jukebox()

        client.close()

        with pytest.raises(ControllerBusyError):
            jukebox.status()

    def test_cannot_bind_to_closed_client(self, client):
        client.close()

        with pytest.raises(ControllerBusyError):
            Jukebox(client)
