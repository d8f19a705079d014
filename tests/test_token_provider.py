"""Tests for the cached bearer token provider."""

import json

import pytest
import requests
import responses
from responses import matchers

from vault_notes.api.auth_api import TOKEN_URL, AuthAPI, AuthError, CachedTokenProvider
from vault_notes.models import CachedToken
from vault_notes.utils.token_cache import JsonFileTokenStore, MemoryTokenStore

from .conftest import NOW

CLIENT_ID = "client-id"
CLIENT_SECRET = "client-secret"


def _provider(http_client, store, clock):
    return CachedTokenProvider(AuthAPI(http_client, CLIENT_ID, CLIENT_SECRET), store, clock=clock)


def _add_token_response(json_body, status=200):
    responses.add(
        responses.POST,
        TOKEN_URL,
        json=json_body,
        status=status,
        match=[
            matchers.urlencoded_params_matcher(
                {
                    "client_id": CLIENT_ID,
                    "client_secret": CLIENT_SECRET,
                    "grant_type": "client_credentials",
                }
            )
        ],
    )


class TestCachedTokenProvider:
    @responses.activate
    def test_valid_cached_token_is_returned_without_network(self, http_client, clock, tmp_path):
        cache_file = tmp_path / "token.json"
        cache_file.write_text(json.dumps({"access_token": "tok1", "expires_at": 9999999999}))

        token = _provider(http_client, JsonFileTokenStore(str(cache_file)), clock).get_token()

        assert token == "tok1"
        assert len(responses.calls) == 0

    @responses.activate
    def test_expired_cached_token_is_refreshed_and_persisted(self, http_client, clock, tmp_path):
        cache_file = tmp_path / "token.json"
        cache_file.write_text(json.dumps({"access_token": "tok1", "expires_at": 1}))
        _add_token_response({"access_token": "tok2", "expires_in": 3600, "token_type": "bearer"})

        token = _provider(http_client, JsonFileTokenStore(str(cache_file)), clock).get_token()

        assert token == "tok2"
        assert len(responses.calls) == 1
        assert json.loads(cache_file.read_text()) == {"access_token": "tok2", "expires_at": NOW + 3600}

    @responses.activate
    def test_missing_cache_triggers_single_exchange(self, http_client, clock):
        store = MemoryTokenStore()
        _add_token_response({"access_token": "fresh", "expires_in": 60})

        assert _provider(http_client, store, clock).get_token() == "fresh"
        assert len(responses.calls) == 1
        assert store.saves == 1
        assert store.token == CachedToken(access_token="fresh", expires_at=NOW + 60)

    @responses.activate
    def test_token_expiring_exactly_now_counts_as_expired(self, http_client, clock):
        store = MemoryTokenStore(CachedToken(access_token="old", expires_at=NOW))
        _add_token_response({"access_token": "new", "expires_in": 3600})

        assert _provider(http_client, store, clock).get_token() == "new"
        assert len(responses.calls) == 1

    @responses.activate
    def test_second_call_reuses_refreshed_token(self, http_client, clock):
        store = MemoryTokenStore()
        _add_token_response({"access_token": "fresh", "expires_in": 3600})
        provider = _provider(http_client, store, clock)

        assert provider.get_token() == "fresh"
        clock.now += 3599
        assert provider.get_token() == "fresh"
        assert len(responses.calls) == 1

    @responses.activate
    def test_unauthorized_exchange_raises_and_writes_nothing(self, http_client, clock, tmp_path):
        cache_file = tmp_path / "token.json"
        _add_token_response({"status": 401, "message": "invalid client secret"}, status=401)

        with pytest.raises(AuthError) as excinfo:
            _provider(http_client, JsonFileTokenStore(str(cache_file)), clock).get_token()

        assert excinfo.value.status_code == 401
        assert "invalid client secret" in str(excinfo.value)
        assert not cache_file.exists()

    @responses.activate
    def test_failed_refresh_keeps_expired_record_untouched(self, http_client, clock):
        expired = CachedToken(access_token="old", expires_at=1)
        store = MemoryTokenStore(expired)
        _add_token_response({"message": "boom"}, status=500)

        with pytest.raises(AuthError) as excinfo:
            _provider(http_client, store, clock).get_token()

        assert excinfo.value.status_code == 500
        assert store.token == expired
        assert store.saves == 0

    @pytest.mark.parametrize(
        "body",
        [
            {"expires_in": 3600},
            {"access_token": "tok", "expires_in": "soon"},
            {"access_token": "", "expires_in": 3600},
            {"access_token": "tok", "expires_in": 0},
            ["not", "an", "object"],
        ],
    )
    @responses.activate
    def test_malformed_body_raises_auth_error(self, http_client, clock, body):
        store = MemoryTokenStore()
        responses.add(responses.POST, TOKEN_URL, json=body, status=200)

        with pytest.raises(AuthError):
            _provider(http_client, store, clock).get_token()
        assert store.saves == 0

    @responses.activate
    def test_non_json_body_raises_auth_error(self, http_client, clock):
        responses.add(responses.POST, TOKEN_URL, body="<html>gateway</html>", status=200)

        with pytest.raises(AuthError):
            _provider(http_client, MemoryTokenStore(), clock).get_token()

    @responses.activate
    def test_network_error_raises_auth_error_without_status(self, http_client, clock):
        responses.add(responses.POST, TOKEN_URL, body=requests.ConnectionError("connection refused"))

        with pytest.raises(AuthError) as excinfo:
            _provider(http_client, MemoryTokenStore(), clock).get_token()

        assert excinfo.value.status_code is None

    @pytest.mark.parametrize("expires_at, expect_hit", [(NOW + 1, True), (NOW, False), (NOW - 1, False)])
    @responses.activate
    def test_saved_record_is_a_hit_only_while_unexpired(self, http_client, clock, tmp_path, expires_at, expect_hit):
        store = JsonFileTokenStore(str(tmp_path / "token.json"))
        store.save(CachedToken(access_token="abc", expires_at=expires_at))
        _add_token_response({"access_token": "refreshed", "expires_in": 3600})

        token = _provider(http_client, store, clock).get_token()

        assert (token == "abc") is expect_hit
        assert len(responses.calls) == (0 if expect_hit else 1)

    @responses.activate
    def test_fractional_expiry_is_a_hit_until_it_passes(self, http_client, tmp_path):
        cache_file = tmp_path / "token.json"
        cache_file.write_text(json.dumps({"access_token": "abc", "expires_at": 1000.9}))
        store = JsonFileTokenStore(str(cache_file))

        assert _provider(http_client, store, lambda: 1000.2).get_token() == "abc"
        assert len(responses.calls) == 0
