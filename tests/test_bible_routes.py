"""Tests for GET /api/bible/esv/chapter (routes/bible.py)"""

import pytest

from utils.esv_client import EsvPassage, EsvPassageError, EsvUpstreamError

CHAPTER_URL = "/api/bible/esv/chapter"

GENESIS_1 = (
    "The Creation\n"
    "[1] In the beginning God created the heavens and the earth.\n"
    "[2] And the earth was without form, and void. (ESV)"
)


@pytest.fixture
def fake_fetch(monkeypatch):
    calls = []

    def install(result=None, error=None):
        def fake(book, chapter, api_key, api_url=None, timeout=None):
            calls.append((book, chapter, api_key))
            if error is not None:
                raise error
            return result
        monkeypatch.setattr("routes.bible.fetch_chapter_passage", fake)
        return calls

    return install


class TestAuthentication:
    def test_missing_token(self, client):
        response = client.get(CHAPTER_URL, query_string={"book": "Genesis", "chapter": "1"})
        assert response.status_code == 401
        assert response.get_json() == {"error": "Unauthorized"}

    def test_malformed_header(self, client):
        response = client.get(CHAPTER_URL, headers={"Authorization": "Token abc"})
        assert response.status_code == 401

    def test_wrong_secret(self, client, token_factory):
        token = token_factory(secret="some-other-secret-that-is-long-enough")
        response = client.get(CHAPTER_URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_expired_token(self, client, token_factory):
        token = token_factory(expires_in=-60)
        response = client.get(CHAPTER_URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_wrong_audience(self, client, token_factory):
        token = token_factory(audience="someone-else")
        response = client.get(CHAPTER_URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


class TestChapterEndpoint:
    def test_success(self, client, auth_headers, fake_fetch):
        calls = fake_fetch(EsvPassage(passage=GENESIS_1, canonical="Genesis 1", copyright="ESV copyright"))
        response = client.get(CHAPTER_URL, headers=auth_headers, query_string={"book": " Genesis ", "chapter": "1"})
        assert response.status_code == 200
        assert response.get_json() == {
            "book": "Genesis",
            "chapter": 1,
            "canonical": "Genesis 1",
            "verses": [
                {
                    "verseNumber": 1,
                    "reference": "Genesis 1:1",
                    "text": "In the beginning God created the heavens and the earth.",
                    "heading": "The Creation",
                },
                {
                    "verseNumber": 2,
                    "reference": "Genesis 1:2",
                    "text": "And the earth was without form, and void.",
                    "heading": None,
                },
            ],
            "attribution": "ESV copyright",
        }
        assert calls == [("Genesis", 1, "test-esv-key")]

    def test_metadata_fallbacks(self, client, auth_headers, fake_fetch):
        fake_fetch(EsvPassage(passage="[1] Grace to you.", canonical=None, copyright="  "))
        response = client.get(CHAPTER_URL, headers=auth_headers, query_string={"book": "1  John", "chapter": "2"})
        body = response.get_json()
        assert body["canonical"] == "1 John 2"
        assert body["attribution"] == "(ESV)"
        assert body["verses"][0]["reference"] == "1 John 2:1"

    def test_missing_api_key(self, app, client, auth_headers, fake_fetch):
        calls = fake_fetch(EsvPassage(passage=GENESIS_1))
        app.config["ESV_API_KEY"] = ""
        response = client.get(CHAPTER_URL, headers=auth_headers, query_string={"book": "Genesis", "chapter": "1"})
        assert response.status_code == 503
        assert response.get_json() == {"error": "ESV API unavailable"}
        assert calls == []

    @pytest.mark.parametrize("book", ["", "Gen<script>", "Genesis 1:1"])
    def test_invalid_book(self, client, auth_headers, fake_fetch, book):
        calls = fake_fetch(EsvPassage(passage=GENESIS_1))
        response = client.get(CHAPTER_URL, headers=auth_headers, query_string={"book": book, "chapter": "1"})
        assert response.status_code == 400
        assert response.get_json() == {"error": "Invalid book parameter"}
        assert calls == []

    @pytest.mark.parametrize("chapter", [None, "abc", "0", "201"])
    def test_invalid_chapter(self, client, auth_headers, fake_fetch, chapter):
        fake_fetch(EsvPassage(passage=GENESIS_1))
        query = {"book": "Genesis"}
        if chapter is not None:
            query["chapter"] = chapter
        response = client.get(CHAPTER_URL, headers=auth_headers, query_string=query)
        assert response.status_code == 400
        assert response.get_json() == {"error": "Invalid chapter parameter"}

    def test_upstream_error(self, client, auth_headers, fake_fetch):
        fake_fetch(error=EsvUpstreamError(500))
        response = client.get(CHAPTER_URL, headers=auth_headers, query_string={"book": "Genesis", "chapter": "1"})
        assert response.status_code == 502
        assert response.get_json() == {"error": "ESV upstream error (500)"}

    def test_missing_passage(self, client, auth_headers, fake_fetch):
        fake_fetch(error=EsvPassageError("Unable to parse ESV passage"))
        response = client.get(CHAPTER_URL, headers=auth_headers, query_string={"book": "Genesis", "chapter": "1"})
        assert response.status_code == 502
        assert response.get_json() == {"error": "Unable to parse ESV passage"}

    def test_unparseable_passage(self, client, auth_headers, fake_fetch):
        fake_fetch(EsvPassage(passage="No verse markers at all"))
        response = client.get(CHAPTER_URL, headers=auth_headers, query_string={"book": "Genesis", "chapter": "1"})
        assert response.status_code == 502
        assert response.get_json() == {"error": "Unable to parse ESV verses"}

    def test_unexpected_error(self, client, auth_headers, fake_fetch):
        fake_fetch(error=RuntimeError("boom"))
        response = client.get(CHAPTER_URL, headers=auth_headers, query_string={"book": "Genesis", "chapter": "1"})
        assert response.status_code == 500
        assert response.get_json() == {"error": "Failed to load chapter"}


class TestHealth:
    def test_reports_esv_configuration(self, app, client):
        assert client.get("/health").get_json()["esv"] == "configured"
        app.config["ESV_API_KEY"] = ""
        body = client.get("/health").get_json()
        assert body["status"] == "healthy"
        assert body["esv"] == "missing"
