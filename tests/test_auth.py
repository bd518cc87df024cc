"""
Tests for the auth emulator: lookups, sign-out fan-out and scripted replay.
"""

import pytest

from supamock.exceptions import AuthNotMockedError

USER = {"id": "user-test123", "email": "test123@example.org"}
SESSION = {"user": USER, "access_token": "mock-access-token", "refresh_token": "mock-refresh-token"}


class Recorder:
    def __init__(self):
        self.events = []

    def __call__(self, event, session):
        self.events.append((event, session))


class TestLookups:
    """get_session / get_user."""

    @pytest.mark.asyncio
    async def test_anonymous_by_default(self, client):
        session = await client.auth.get_session()
        user = await client.auth.get_user()

        assert session.data == {"session": None}
        assert user.data == {"user": None}
        assert session.error is None

    @pytest.mark.asyncio
    async def test_configured_principal(self, client):
        client.set_auth_user(USER, SESSION)

        assert (await client.auth.get_session()).data == {"session": SESSION}
        assert (await client.auth.get_user()).data == {"user": USER}
        assert client.auth_state.is_authenticated

    @pytest.mark.asyncio
    async def test_standing_auth_error_is_returned_with_data(self, client):
        client.set_auth_user(USER, SESSION)
        client.set_auth_error("Authentication service unavailable")

        result = await client.auth.get_user()

        assert result.data == {"user": USER}
        assert result.error == "Authentication service unavailable"

    @pytest.mark.asyncio
    async def test_configuration_is_silent(self, client, scheduler):
        recorder = Recorder()
        client.auth.on_auth_state_change(recorder)

        client.set_auth_user(USER, SESSION)
        scheduler.run_all()

        assert recorder.events == []


class TestSignInFlows:
    """Supported and unsupported credential flows."""

    @pytest.mark.asyncio
    async def test_otp_succeeds_without_session(self, client):
        result = await client.auth.sign_in_with_otp({"email": "a@example.org"})

        assert result.data == {"user": None, "session": None}
        assert result.error is None
        assert client.auth.calls_to("sign_in_with_otp") == [{"email": "a@example.org"}]

    @pytest.mark.asyncio
    async def test_otp_returns_standing_error(self, client):
        client.set_auth_error("Too many requests. Please try again later.")

        result = await client.auth.sign_in_with_otp(email="a@example.org")

        assert result.data is None
        assert result.error == "Too many requests. Please try again later."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["sign_in_with_password", "sign_in_with_oauth", "sign_up"])
    async def test_unsupported_flows_resolve_with_error(self, client, method):
        result = await getattr(client.auth, method)({"email": "a@example.org", "password": "x"})

        assert result.data is None
        assert result.error == AuthNotMockedError(method)
        assert str(result.error) == f"Auth method {method} not mocked"


class TestSignOut:
    """sign_out clears state and notifies live subscribers synchronously."""

    @pytest.mark.asyncio
    async def test_sign_out_notifies_immediately(self, client, scheduler):
        client.set_auth_user(USER, SESSION)
        first, second = Recorder(), Recorder()
        client.auth.on_auth_state_change(first)
        client.auth.on_auth_state_change(second)

        result = await client.auth.sign_out()

        assert result.error is None
        assert first.events == [("SIGNED_OUT", None)]
        assert second.events == [("SIGNED_OUT", None)]
        assert scheduler.pending == 0
        assert (await client.auth.get_session()).data == {"session": None}
        assert not client.auth_state.is_authenticated

    @pytest.mark.asyncio
    async def test_unsubscribed_listener_misses_sign_out(self, client):
        recorder = Recorder()
        subscription = client.auth.on_auth_state_change(recorder)

        subscription.unsubscribe()
        await client.auth.sign_out()

        assert recorder.events == []
        assert not subscription.active
        assert client.auth.subscriber_count == 0


class TestReplay:
    """Scripted events are replayed to every new subscriber."""

    def test_replay_is_deferred_to_next_tick(self, client, scheduler):
        client.add_auth_state_change("SIGNED_IN", SESSION)
        recorder = Recorder()

        client.auth.on_auth_state_change(recorder)
        assert recorder.events == []

        scheduler.advance(0)
        assert recorder.events == [("SIGNED_IN", SESSION)]

    def test_each_subscriber_gets_full_history(self, client, scheduler):
        client.add_auth_state_change("SIGNED_IN", SESSION)
        client.add_auth_state_change("TOKEN_REFRESHED", SESSION)
        client.add_auth_state_change("SIGNED_OUT", None)
        recorders = [Recorder() for _ in range(3)]

        for recorder in recorders:
            client.auth.on_auth_state_change(recorder)
        scheduler.run_all()

        expected = [("SIGNED_IN", SESSION), ("TOKEN_REFRESHED", SESSION), ("SIGNED_OUT", None)]
        for recorder in recorders:
            assert recorder.events == expected

    def test_any_event_name_can_be_scripted(self, client, scheduler):
        client.add_auth_state_change("MFA_CHALLENGE_VERIFIED", SESSION)
        recorder = Recorder()

        client.auth.on_auth_state_change(recorder)
        scheduler.run_all()

        assert recorder.events == [("MFA_CHALLENGE_VERIFIED", SESSION)]

    def test_late_subscriber_still_replays_history(self, client, scheduler):
        client.add_auth_state_change("SIGNED_IN", SESSION)
        early, late = Recorder(), Recorder()

        client.auth.on_auth_state_change(early)
        scheduler.run_all()
        client.auth.on_auth_state_change(late)
        scheduler.run_all()

        assert early.events == [("SIGNED_IN", SESSION)]
        assert late.events == [("SIGNED_IN", SESSION)]

    def test_unsubscribe_does_not_cancel_scheduled_replay(self, client, scheduler):
        client.add_auth_state_change("SIGNED_IN", SESSION)
        recorder = Recorder()

        subscription = client.auth.on_auth_state_change(recorder)
        subscription.unsubscribe()
        scheduler.advance(1000)

        assert recorder.events == [("SIGNED_IN", SESSION)]

    def test_calls_are_recorded(self, client):
        client.auth.on_auth_state_change(Recorder())

        assert [name for name, _ in client.auth.calls] == ["on_auth_state_change"]
