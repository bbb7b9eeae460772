"""Tests for bearer token issuance, resolution and revocation."""

from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import jwt
import pytest

from learnhub.core.modules.session.manager import TOKEN_ALPHABET, TOKEN_LENGTH, TokenManager

SECRET_KEY = "test-secret-key-0123456789abcdefghij"


def session_id(auth_token: str) -> str:
    return jwt.decode(auth_token, options={"verify_signature": False})["sid"]


class TestIssueToken:
    """Tests for issue_token."""

    def test_round_trip(self, token_manager):
        auth_token = token_manager.issue_token("user-42")
        assert token_manager.resolve_token(auth_token) == "user-42"

    def test_session_id_format(self, token_manager):
        sid = session_id(token_manager.issue_token("user-42"))
        assert len(sid) == TOKEN_LENGTH
        assert set(sid) <= set(TOKEN_ALPHABET)

    def test_alphabet_has_64_symbols(self):
        assert len(set(TOKEN_ALPHABET)) == 64

    def test_session_ids_are_unique(self, token_manager):
        tokens = [token_manager.issue_token(f"user-{i}") for i in range(200)]
        assert len({session_id(token) for token in tokens}) == 200
        assert token_manager.active_sessions() == 200

    def test_concurrent_issue(self, token_manager):
        with ThreadPoolExecutor(max_workers=8) as pool:
            tokens = list(pool.map(token_manager.issue_token, range(400)))
        assert len({session_id(token) for token in tokens}) == 400
        assert token_manager.active_sessions() == 400

    def test_collision_triggers_regeneration(self, token_manager, monkeypatch):
        generated = iter(["A" * TOKEN_LENGTH, "A" * TOKEN_LENGTH, "B" * TOKEN_LENGTH])
        monkeypatch.setattr(TokenManager, "_generate_token", staticmethod(lambda: next(generated)))

        first = token_manager.issue_token("user-1")
        second = token_manager.issue_token("user-2")

        assert session_id(first) == "A" * TOKEN_LENGTH
        assert session_id(second) == "B" * TOKEN_LENGTH
        assert token_manager.resolve_token(first) == "user-1"
        assert token_manager.resolve_token(second) == "user-2"

    def test_non_positive_idle_timeout_rejected(self, token_manager):
        with pytest.raises(ValueError):
            token_manager.issue_token("user-42", 0)
        with pytest.raises(ValueError):
            token_manager.issue_token("user-42", -5)

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            TokenManager("")

    def test_token_carries_expiry_claim(self, token_manager, clock):
        payload = jwt.decode(token_manager.issue_token("user-42"), options={"verify_signature": False})
        assert payload["exp"] == int((clock() + timedelta(hours=24)).timestamp())

    def test_no_expiry_claim_without_lifetime(self, clock):
        manager = TokenManager(SECRET_KEY, token_lifetime=None, clock=clock)
        payload = jwt.decode(manager.issue_token("user-42"), options={"verify_signature": False})
        assert "exp" not in payload


class TestResolveToken:
    """Tests for resolve_token."""

    def test_idle_expiry(self, token_manager, clock):
        auth_token = token_manager.issue_token("user-42", 15)
        clock.advance(minutes=15)
        assert token_manager.resolve_token(auth_token) is None

    def test_just_before_idle_expiry(self, token_manager, clock):
        auth_token = token_manager.issue_token("user-42", 15)
        clock.advance(minutes=14, seconds=59)
        assert token_manager.resolve_token(auth_token) == "user-42"

    def test_default_idle_timeout_is_one_hour(self, token_manager, clock):
        auth_token = token_manager.issue_token("user-42")
        clock.advance(minutes=59)
        assert token_manager.resolve_token(auth_token) == "user-42"
        clock.advance(minutes=60)
        assert token_manager.resolve_token(auth_token) is None

    def test_activity_keeps_session_alive(self, token_manager, clock):
        auth_token = token_manager.issue_token("user-42", 10)
        for _ in range(12):
            clock.advance(minutes=9)
            assert token_manager.resolve_token(auth_token) == "user-42"

    def test_token_lifetime_ends_active_session(self, token_manager, clock):
        auth_token = token_manager.issue_token("user-42", 60)
        for _ in range(47):
            clock.advance(minutes=30)
            assert token_manager.resolve_token(auth_token) == "user-42"
        clock.advance(minutes=30)
        assert token_manager.resolve_token(auth_token) is None
        assert token_manager.active_sessions() == 0
        assert token_manager.revoke_user_sessions("user-42") == 0

    def test_last_accessed_never_moves_backwards(self, token_manager, clock):
        start = clock()
        auth_token = token_manager.issue_token("user-42", 60)

        clock.current = start + timedelta(minutes=30)
        assert token_manager.resolve_token(auth_token) == "user-42"
        clock.current = start + timedelta(minutes=10)
        assert token_manager.resolve_token(auth_token) == "user-42"
        # Idle is measured from minute 30, not minute 10
        clock.current = start + timedelta(minutes=89)
        assert token_manager.resolve_token(auth_token) == "user-42"

    @pytest.mark.parametrize("garbage", ["not-a-real-token", "", "a.b.c", None, 42, b"bytes"])
    def test_garbage_input(self, token_manager, garbage):
        assert token_manager.resolve_token(garbage) is None

    def test_wrong_signature(self, token_manager):
        auth_token = token_manager.issue_token("user-42")
        forged = jwt.encode({"sid": session_id(auth_token)}, "another-secret-0123456789abcdefghij", algorithm="HS256")
        assert token_manager.resolve_token(forged) is None

    def test_unknown_session(self, token_manager):
        unknown = jwt.encode({"sid": "Z" * TOKEN_LENGTH}, SECRET_KEY, algorithm="HS256")
        assert token_manager.resolve_token(unknown) is None

    def test_missing_session_id_claim(self, token_manager):
        token_manager.issue_token("user-42")
        no_sid = jwt.encode({"user": "user-42"}, SECRET_KEY, algorithm="HS256")
        assert token_manager.resolve_token(no_sid) is None

    def test_resolve_only_touches_own_session(self, token_manager, clock):
        first = token_manager.issue_token("user-1", 10)
        second = token_manager.issue_token("user-2", 10)
        clock.advance(minutes=6)
        assert token_manager.resolve_token(first) == "user-1"
        clock.advance(minutes=6)
        assert token_manager.resolve_token(first) == "user-1"
        assert token_manager.resolve_token(second) is None


class TestRevokeToken:
    """Tests for revoke_token."""

    def test_revocation_is_terminal(self, token_manager):
        auth_token = token_manager.issue_token("user-42")
        assert token_manager.revoke_token(auth_token) is True
        assert token_manager.resolve_token(auth_token) is None
        assert token_manager.revoke_token(auth_token) is False

    @pytest.mark.parametrize("garbage", ["not-a-real-token", "", None])
    def test_garbage_input(self, token_manager, garbage):
        assert token_manager.revoke_token(garbage) is False

    def test_expired_session_cannot_be_revoked(self, token_manager, clock):
        auth_token = token_manager.issue_token("user-42", 5)
        clock.advance(minutes=5)
        assert token_manager.revoke_token(auth_token) is False

    def test_revoke_user_sessions(self, token_manager):
        tokens = [token_manager.issue_token("user-42") for _ in range(3)]
        other = token_manager.issue_token("user-7")

        assert token_manager.revoke_user_sessions("user-42") == 3
        assert all(token_manager.resolve_token(token) is None for token in tokens)
        assert token_manager.resolve_token(other) == "user-7"
        assert token_manager.revoke_user_sessions("user-42") == 0


class TestSweep:
    """Tests for expiry sweeping."""

    def test_sweep_removes_idle_sessions(self, token_manager, clock):
        token_manager.issue_token("short", 5)
        token_manager.issue_token("long", 60)
        clock.advance(minutes=10)
        assert token_manager.sweep() == 1
        assert token_manager.active_sessions() == 1

    def test_sweep_removes_sessions_past_token_lifetime(self, token_manager, clock):
        token_manager.issue_token("user-42", 48 * 60)
        clock.advance(hours=23, minutes=59)
        assert token_manager.sweep() == 0
        clock.advance(minutes=1)
        assert token_manager.sweep() == 1
        assert token_manager.active_sessions() == 0

    def test_no_lifetime_leaves_idle_timeout_only(self, clock):
        manager = TokenManager(SECRET_KEY, token_lifetime=None, clock=clock)
        auth_token = manager.issue_token("user-42", 60)
        for _ in range(60):
            clock.advance(minutes=30)
            assert manager.resolve_token(auth_token) == "user-42"
        assert manager.active_sessions() == 1

    def test_issue_sweeps_first(self, token_manager, clock):
        token_manager.issue_token("short", 5)
        clock.advance(minutes=5)
        token_manager.issue_token("fresh")
        assert token_manager.active_sessions() == 1


class TestScenarios:
    """End-to-end session lifecycles."""

    def test_login_logout_cycle(self, token_manager):
        auth_token = token_manager.issue_token("user-42")
        assert token_manager.resolve_token(auth_token) == "user-42"
        assert token_manager.revoke_token(auth_token) is True
        assert token_manager.resolve_token(auth_token) is None
        assert token_manager.revoke_token(auth_token) is False

    def test_two_tokens_for_same_user(self, token_manager):
        first = token_manager.issue_token("user-42")
        second = token_manager.issue_token("user-42")

        assert first != second
        assert token_manager.resolve_token(first) == "user-42"
        assert token_manager.resolve_token(second) == "user-42"

        assert token_manager.revoke_token(first) is True
        assert token_manager.resolve_token(first) is None
        assert token_manager.resolve_token(second) == "user-42"
