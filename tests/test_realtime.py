"""
Tests for best-effort realtime broadcasting and the chat endpoint.
"""
from vocassion.services.realtime import (
    Broadcaster,
    publish_chat_message,
    publish_leaderboard_update,
)
from conftest import RecordingPusher


class ExplodingPusher:
    def trigger(self, channel, event, payload):
        raise RuntimeError("push service unavailable")


class TestBroadcaster:
    def test_disabled_broadcaster_skips(self):
        b = Broadcaster(client=None)
        assert not b.is_enabled
        assert b.publish("chat-channel", "new-message", {"message": "hi"}) is False

    def test_publish_records_event(self):
        recorder = RecordingPusher()
        assert publish_chat_message(Broadcaster(client=recorder), "user-1", "hello") is True
        assert recorder.events == [
            ("chat-channel", "new-message", {"message": "hello", "userId": "user-1"}),
        ]

    def test_delivery_failure_is_swallowed_and_reported(self, caplog):
        b = Broadcaster(client=ExplodingPusher())
        assert publish_leaderboard_update(b, "user-1", "climbed") is False
        assert any("broadcast failed" in r.message for r in caplog.records)


class TestChatEndpoint:
    def test_message_is_broadcast(self, client, user_id, pusher_client):
        r = client.post("/api/chat", json={"message": "  hello everyone  "})
        assert r.status_code == 200
        body = r.json()
        assert body == {"message": "hello everyone", "user_id": user_id, "delivered": True}
        assert pusher_client.events == [
            ("chat-channel", "new-message", {"message": "hello everyone", "userId": user_id}),
        ]

    def test_blank_message_rejected(self, client, pusher_client):
        r = client.post("/api/chat", json={"message": "   "})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"
        assert pusher_client.events == []

    def test_chat_requires_identity(self, anon_client):
        r = anon_client.post("/api/chat", json={"message": "hi"})
        assert r.status_code == 401
        assert r.json()["code"] == "UNAUTHORIZED"

    def test_ikigai_first_save_updates_leaderboard(self, client, pusher_client):
        r = client.post("/api/ikigai", json={"passion": ["music"]})
        assert r.status_code == 200
        assert [e[:2] for e in pusher_client.events] == [("leaderboard-channel", "update")]

        client.post("/api/ikigai", json={"passion": ["music", "art"]})
        assert len(pusher_client.events) == 1
