from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest

from devcred.models.auth.schemas import OAuthToken
from devcred.models.github.schemas import ContributionSummary, GitHubProfile
from devcred.models.grove.document import GroveKey, GroveUriDocument
from devcred.models.grove.schemas import GroveUrisResponse
from devcred.workers.fetcher import FetchError
from devcred.workers.github import GitHubNotFoundError, OAuthError

_NOW = datetime.now(timezone.utc)
_TOKEN = OAuthToken(access_token="gho_abcdef", token_type="bearer", scope="repo")


@pytest.fixture
def fetch():
    with patch(
        "devcred.services.metadata.service.fetch_json", new_callable=AsyncMock
    ) as mock_fetch:
        mock_fetch.return_value = {"name": "Badge #7", "image": "ipfs://img123"}
        yield mock_fetch


class TestGetMetadata:
    def test_resolves_document(self, client, fetch):
        resp = client.get("/metadata/7?uri=ipfs://meta123")

        assert resp.status_code == 200
        assert resp.json() == {
            "name": "Badge #7",
            "image": "https://cloudflare-ipfs.com/ipfs/img123",
        }
        fetch.assert_called_once_with("https://cloudflare-ipfs.com/ipfs/meta123")

    def test_second_request_served_from_cache(self, client, fetch):
        r1 = client.get("/metadata/7?uri=ipfs://meta123")
        r2 = client.get("/metadata/8?uri=ipfs://meta123")

        assert r1.json() == r2.json()
        assert fetch.call_count == 1

    def test_missing_uri_returns_400(self, client, fetch):
        resp = client.get("/metadata/7")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Missing URI parameter"
        fetch.assert_not_called()

    def test_empty_uri_returns_400(self, client, fetch):
        resp = client.get("/metadata/7?uri=")
        assert resp.status_code == 400
        fetch.assert_not_called()

    def test_fetch_failure_returns_500(self, client, fetch):
        fetch.side_effect = FetchError("'https://cloudflare-ipfs.com/ipfs/x' answered HTTP 502")
        resp = client.get("/metadata/7?uri=ipfs://x")
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to resolve metadata"


class TestClearCache:
    def test_clear_cache(self, client, fetch):
        client.get("/metadata/7?uri=ipfs://meta123")

        resp = client.post("/metadata/clear-cache")
        assert resp.status_code == 200
        assert resp.json()["success"] is True

        client.get("/metadata/7?uri=ipfs://meta123")
        assert fetch.call_count == 2

    def test_clear_empty_cache(self, client):
        resp = client.post("/metadata/clear-cache")
        assert resp.status_code == 200
        assert len(client.app.state.metadata_cache) == 0


class TestNftImage:
    def test_generate_returns_svg(self, client):
        resp = client.get(
            "/nft-image/generate",
            params={"repo": "devcred", "contributor": "octocat", "score": "87", "rarity": "epic"},
        )
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("image/svg+xml")
        assert "devcred" in resp.text
        assert "Contributor: octocat" in resp.text
        assert "#805AD5" in resp.text
        assert ">EPIC<" in resp.text

    def test_generate_defaults(self, client):
        resp = client.get("/nft-image/generate")
        assert resp.status_code == 200
        assert "Unknown Repo" in resp.text
        assert ">COMMON<" in resp.text

    def test_render_failure_returns_500(self, client):
        with patch(
            "devcred.api.nft_image.routes.render_nft_svg",
            side_effect=RuntimeError("template broken"),
        ):
            resp = client.get("/nft-image/generate")
        assert resp.status_code == 500


class TestOAuthCallback:
    def test_post_callback_success(self, client):
        with patch(
            "devcred.api.auth.routes.exchange_code",
            new_callable=AsyncMock,
            return_value=_TOKEN,
        ) as mock_exchange:
            resp = client.post("/auth/callback", json={"code": "abc"})
        assert resp.status_code == 200
        assert resp.json() == {"access_token": "gho_abcdef", "token_type": "bearer", "scope": "repo"}
        mock_exchange.assert_called_once_with("abc")

    def test_get_callback_success(self, client):
        with patch(
            "devcred.api.auth.routes.exchange_code",
            new_callable=AsyncMock,
            return_value=_TOKEN,
        ):
            resp = client.get("/github/oauth/callback?code=abc&state=xyz")
        assert resp.status_code == 200
        assert resp.json()["access_token"] == "gho_abcdef"

    @pytest.mark.parametrize(
        "call",
        [
            lambda c: c.post("/auth/callback", json={}),
            lambda c: c.get("/github/oauth/callback"),
        ],
    )
    def test_missing_code_returns_400(self, client, call):
        with patch("devcred.api.auth.routes.exchange_code", new_callable=AsyncMock) as mock_exchange:
            resp = call(client)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Authorization code is required"
        mock_exchange.assert_not_called()

    def test_github_rejection_returns_400(self, client):
        with patch(
            "devcred.api.auth.routes.exchange_code",
            new_callable=AsyncMock,
            side_effect=OAuthError("bad_verification_code", "The code is incorrect"),
        ):
            resp = client.post("/auth/callback", json={"code": "stale"})
        assert resp.status_code == 400
        assert resp.json()["detail"]["error"] == "bad_verification_code"

    def test_transport_error_returns_500(self, client):
        with patch(
            "devcred.api.auth.routes.exchange_code",
            new_callable=AsyncMock,
            side_effect=FetchError("connection refused"),
        ):
            resp = client.post("/auth/callback", json={"code": "abc"})
        assert resp.status_code == 500
        assert resp.json()["detail"]["message"] == "Error exchanging code for token"


class TestGitHub:
    def test_profile(self, client):
        profile = GitHubProfile(login="octocat", id=1, public_repos=8)
        with patch(
            "devcred.api.github.routes.GitHubService.get_profile",
            new_callable=AsyncMock,
            return_value=profile,
        ):
            resp = client.get("/github/users/octocat")
        assert resp.status_code == 200
        assert resp.json()["login"] == "octocat"

    def test_unknown_user_returns_404(self, client):
        with patch(
            "devcred.api.github.routes.GitHubService.get_profile",
            new_callable=AsyncMock,
            side_effect=GitHubNotFoundError("/users/ghost"),
        ):
            resp = client.get("/github/users/ghost")
        assert resp.status_code == 404

    def test_upstream_failure_returns_502(self, client):
        with patch(
            "devcred.api.github.routes.GitHubService.list_repositories",
            new_callable=AsyncMock,
            side_effect=FetchError("timed out"),
        ):
            resp = client.get("/github/users/octocat/repos")
        assert resp.status_code == 502

    def test_contributions(self, client):
        summary = ContributionSummary(
            username="octocat", total=0, active_days=0, longest_streak=0, by_type={}, days=[]
        )
        with patch(
            "devcred.api.github.routes.GitHubService.contribution_summary",
            new_callable=AsyncMock,
            return_value=summary,
        ):
            resp = client.get("/github/users/octocat/contributions")
        assert resp.status_code == 200
        assert resp.json()["username"] == "octocat"

    def test_bearer_token_is_forwarded(self, client):
        with patch("devcred.api.github.routes.GitHubService") as mock_service_cls:
            mock_service_cls.return_value.get_profile = AsyncMock(
                return_value=GitHubProfile(login="octocat", id=1)
            )
            client.get("/github/users/octocat", headers={"Authorization": "Bearer gho_user"})
        mock_service_cls.assert_called_once_with("gho_user")


class TestGrove:
    def test_update_uri(self, client):
        doc = GroveUriDocument(key=GroveKey.NFTS, uri="lens://abc", updated_at=_NOW)
        with patch(
            "devcred.api.grove.routes.GroveService.set_uri",
            new_callable=AsyncMock,
            return_value=doc,
        ):
            resp = client.post("/grove/uri", json={"key": "nfts", "uri": "lens://abc"})
        assert resp.status_code == 200
        assert resp.json()["uri"] == "lens://abc"

    def test_update_rejects_non_lens_uri(self, client):
        resp = client.post("/grove/uri", json={"key": "nfts", "uri": "ipfs://abc"})
        assert resp.status_code == 422

    def test_update_rejects_unknown_key(self, client):
        resp = client.post("/grove/uri", json={"key": "wallets", "uri": "lens://abc"})
        assert resp.status_code == 422

    def test_update_db_error_returns_500(self, client):
        with patch(
            "devcred.api.grove.routes.GroveService.set_uri",
            new_callable=AsyncMock,
            side_effect=RuntimeError("Database write error"),
        ):
            resp = client.post("/grove/uri", json={"key": "nfts", "uri": "lens://abc"})
        assert resp.status_code == 500

    def test_list_uris(self, client):
        with patch(
            "devcred.api.grove.routes.GroveService.list_uris",
            new_callable=AsyncMock,
            return_value=GroveUrisResponse(posts="lens://p1"),
        ):
            resp = client.get("/grove/uris")
        assert resp.status_code == 200
        assert resp.json()["posts"] == "lens://p1"
        assert resp.json()["users"] == ""


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
