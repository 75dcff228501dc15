"""Tests de scraper.pitc: tokens ASP.NET y envío del formulario."""

import httpx
import pytest

from config.pitc_selectors import USER_AGENT
from scraper.errors import StructuralError, TokensMissingError
from scraper.models import SessionTokens
from scraper.pitc import build_form_data, parse_session_tokens

from tests.conftest import SESSION_COOKIES, FakePortal, token_page

URL = "https://bill.pitc.com.pk/lescobill"


class TestParseSessionTokens:
    def test_extracts_all_four_tokens_unmodified(self):
        html = token_page(
            view_state="/wEPDwUKMTY3NzE5MjIzOWRk+/==",
            generator="CA0B0334",
            event_validation="/wEdAAWx2u+9Z",
            verification="CfDJ8Nq-token",
        )
        tokens = parse_session_tokens(html)
        assert tokens == SessionTokens(
            view_state="/wEPDwUKMTY3NzE5MjIzOWRk+/==",
            view_state_generator="CA0B0334",
            event_validation="/wEdAAWx2u+9Z",
            request_verification_token="CfDJ8Nq-token",
        )

    @pytest.mark.parametrize("missing", ["view_state", "generator", "event_validation"])
    def test_missing_required_token(self, missing):
        with pytest.raises(TokensMissingError) as exc_info:
            parse_session_tokens(token_page(**{missing: None}))
        assert str(exc_info.value) == "Failed to extract required tokens from PITC portal"

    def test_empty_required_token_counts_as_missing(self):
        with pytest.raises(StructuralError):
            parse_session_tokens(token_page(view_state=""))

    def test_verification_token_is_optional(self):
        tokens = parse_session_tokens(token_page(verification=None))
        assert tokens.request_verification_token == ""
        assert tokens.view_state == "VS-TOKEN"

    def test_error_page_without_form(self):
        with pytest.raises(TokensMissingError):
            parse_session_tokens("<html><body><h1>Service Unavailable</h1></body></html>")


class TestBuildFormData:
    def test_exact_fields(self):
        tokens = SessionTokens(
            view_state="VS", view_state_generator="GEN", event_validation="EV",
        )
        assert build_form_data(tokens, "06113530462901") == {
            "__VIEWSTATE": "VS",
            "__VIEWSTATEGENERATOR": "GEN",
            "__EVENTVALIDATION": "EV",
            "__RequestVerificationToken": "",
            "rbSearchByList": "refno",
            "searchTextBox": "06113530462901",
            "ruCodeTextBox": "",
            "btnSearch": "Search",
        }


class TestFetchTokens:
    @pytest.mark.asyncio
    async def test_returns_tokens_and_joined_cookie(self, portal, make_scraper):
        scraper = make_scraper(portal)
        tokens, cookie = await scraper.fetch_tokens(URL)

        assert tokens.view_state == "VS-TOKEN"
        assert tokens.request_verification_token == "RVT-TOKEN"
        assert cookie == "; ".join(SESSION_COOKIES)

        request = portal.requests[0]
        assert request.method == "GET"
        assert str(request.url) == URL
        assert request.headers["user-agent"] == USER_AGENT

    @pytest.mark.asyncio
    async def test_no_cookie_issued(self, make_scraper):
        scraper = make_scraper(FakePortal(cookies=[]))
        _, cookie = await scraper.fetch_tokens(URL)
        assert cookie == ""

    @pytest.mark.asyncio
    async def test_missing_tokens_raise(self, make_scraper):
        scraper = make_scraper(FakePortal(get_html=token_page(event_validation=None)))
        with pytest.raises(TokensMissingError):
            await scraper.fetch_tokens(URL)

    @pytest.mark.asyncio
    async def test_http_error_status_raises(self, make_scraper):
        scraper = make_scraper(lambda request: httpx.Response(503, text="down"))
        with pytest.raises(httpx.HTTPStatusError):
            await scraper.fetch_tokens(URL)


class TestSubmitLookup:
    @pytest.mark.asyncio
    async def test_posts_form_with_session_headers(self, portal, make_scraper):
        scraper = make_scraper(portal)
        tokens = SessionTokens(view_state="VS", view_state_generator="GEN", event_validation="EV")

        body = await scraper.submit_lookup(URL, tokens, "ASP.NET_SessionId=abc123; path=/", "06113530462901")

        assert "Jane Doe" in body
        request = portal.posts[0]
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert request.headers["referer"] == URL
        assert request.headers["cookie"] == "ASP.NET_SessionId=abc123; path=/"
        assert request.headers["user-agent"] == USER_AGENT

        form = portal.form_of(request)
        assert form["searchTextBox"] == ["06113530462901"]
        assert form["rbSearchByList"] == ["refno"]
        assert form["__RequestVerificationToken"] == [""]
        assert form["ruCodeTextBox"] == [""]
        assert form["btnSearch"] == ["Search"]

    @pytest.mark.asyncio
    async def test_follows_redirects(self, make_scraper):
        def handler(request):
            if request.method == "POST":
                return httpx.Response(302, headers={"location": URL + "?result=1"})
            return httpx.Response(200, text="<div id='ua'></div><table></table>")

        scraper = make_scraper(handler)
        tokens = SessionTokens(view_state="VS", view_state_generator="GEN", event_validation="EV")
        body = await scraper.submit_lookup(URL, tokens, "", "06113530462901")
        assert "<table>" in body

    @pytest.mark.asyncio
    async def test_redirected_request_keeps_session_cookie(self, make_scraper):
        seen = []

        def handler(request):
            seen.append(request)
            if request.method == "POST":
                return httpx.Response(302, headers={"location": URL + "?result=1"})
            return httpx.Response(200, text="<div id='ua'></div><table></table>")

        scraper = make_scraper(handler)
        tokens = SessionTokens(view_state="VS", view_state_generator="GEN", event_validation="EV")
        await scraper.submit_lookup(URL, tokens, "ASP.NET_SessionId=abc123", "06113530462901")

        assert [request.method for request in seen] == ["POST", "GET"]
        assert seen[1].headers.get("cookie") == "ASP.NET_SessionId=abc123"
        assert seen[1].headers["user-agent"] == USER_AGENT
        assert seen[1].headers["referer"] == URL

    @pytest.mark.asyncio
    async def test_cookie_not_sent_to_other_host(self, make_scraper):
        seen = []

        def handler(request):
            seen.append(request)
            if request.method == "POST":
                return httpx.Response(302, headers={"location": "https://other.example.com/result"})
            return httpx.Response(200, text="<div id='ua'></div><table></table>")

        scraper = make_scraper(handler)
        tokens = SessionTokens(view_state="VS", view_state_generator="GEN", event_validation="EV")
        await scraper.submit_lookup(URL, tokens, "ASP.NET_SessionId=abc123", "06113530462901")

        assert seen[1].url.host == "other.example.com"
        assert seen[1].headers.get("cookie") is None

    @pytest.mark.asyncio
    async def test_redirect_loop_is_capped(self, make_scraper):
        hops = []

        def handler(request):
            hops.append(request)
            return httpx.Response(302, headers={"location": f"{URL}?hop={len(hops)}"})

        scraper = make_scraper(handler)
        tokens = SessionTokens(view_state="VS", view_state_generator="GEN", event_validation="EV")
        with pytest.raises(httpx.TooManyRedirects):
            await scraper.submit_lookup(URL, tokens, "", "06113530462901")
        assert len(hops) == 6
