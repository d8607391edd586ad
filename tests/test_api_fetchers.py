import httpx
import pytest

from sources import ArchiveOrgFetcher, GoogleBooksFetcher, RedditFetcher
from sources.matching import UNKNOWN_YEAR


# =============================================================================
# archive.org
# =============================================================================

@pytest.mark.asyncio
async def test_archive_keeps_only_matching_docs(mock_client):
    calls = {}

    def handler(request):
        calls["url"] = request.url
        return httpx.Response(200, json={
            "response": {
                "docs": [
                    {"title": "Widget Monthly", "year": "2012", "identifier": "wm12"},
                    {"title": "Unrelated Thing", "year": "2012", "identifier": "ut"},
                ]
            }
        })

    fetcher = ArchiveOrgFetcher(client=mock_client(handler))
    results = await fetcher.search("Widget Monthly")

    assert len(results) == 1
    result = results[0]
    assert result.source == "archive-catalog"
    assert result.url.endswith("wm12")
    assert result.url == "https://archive.org/details/wm12"
    assert result.year == "2012"
    assert result.description == ""

    params = calls["url"].params
    assert params["q"] == 'title:("Widget Monthly") AND mediatype:(texts)'
    assert params["rows"] == "100"
    assert params["output"] == "json"
    assert params.get_list("sort[]") == ["year asc"]
    assert "identifier" in params.get_list("fl[]")


@pytest.mark.asyncio
async def test_archive_handles_missing_and_list_fields(mock_client):
    def handler(request):
        return httpx.Response(200, json={
            "response": {
                "docs": [
                    {"title": ["Widget Monthly", "Spring"], "identifier": "wm-spring",
                     "description": ["Scans", "of issue 1"]},
                    {"title": "Widget Monthly 1987", "year": 1987, "identifier": "wm87"},
                    {"title": "Widget Monthly"},
                ]
            }
        })

    results = await ArchiveOrgFetcher(client=mock_client(handler)).search("Widget Monthly")

    assert [r.url for r in results] == [
        "https://archive.org/details/wm-spring",
        "https://archive.org/details/wm87",
    ]
    assert results[0].title == "Widget Monthly Spring"
    assert results[0].year == UNKNOWN_YEAR
    assert results[0].description == "Scans of issue 1"
    # Out-of-window structured years degrade to the sentinel
    assert results[1].year == UNKNOWN_YEAR


@pytest.mark.asyncio
async def test_archive_failure_returns_empty_and_records_warning(mock_client):
    def handler(request):
        return httpx.Response(503, text="down")

    fetcher = ArchiveOrgFetcher(client=mock_client(handler))
    results = await fetcher.search("Widget Monthly")

    assert results == []
    assert len(fetcher.warnings) == 1
    assert fetcher.warnings[0].source == "archive-catalog"
    assert "503" in fetcher.warnings[0].error


@pytest.mark.asyncio
async def test_archive_non_json_body_is_a_unit_failure(mock_client):
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    fetcher = ArchiveOrgFetcher(client=mock_client(handler))

    assert await fetcher.search("Widget Monthly") == []
    assert len(fetcher.warnings) == 1


# =============================================================================
# Google Books
# =============================================================================

def _volume(title, published=None, preview="https://books.google.com/books?id=x", **extra):
    info = {"title": title, "previewLink": preview}
    if published is not None:
        info["publishedDate"] = published
    info.update(extra)
    return {"volumeInfo": info}


@pytest.mark.asyncio
async def test_google_books_normalizes_volumes(mock_client):
    calls = {}

    def handler(request):
        calls["params"] = request.url.params
        return httpx.Response(200, json={"items": [
            _volume("Widget Monthly", "2014-03", description="March issue"),
            _volume("Gadget Quarterly", "2014"),
        ]})

    results = await GoogleBooksFetcher(client=mock_client(handler)).search("Widget Monthly")

    assert len(results) == 1
    assert results[0].source == "google_books"
    assert results[0].year == "2014"
    assert results[0].description == "March issue"
    assert calls["params"]["q"] == 'intitle:"Widget Monthly"'
    assert calls["params"]["maxResults"] == "40"


@pytest.mark.asyncio
async def test_google_books_drops_volumes_without_year_known_divergence(mock_client):
    # Every other fetcher keeps such records tagged "Unknown"; this one drops them
    def handler(request):
        return httpx.Response(200, json={"items": [
            _volume("Widget Monthly", None, preview="https://books.google.com/books?id=a"),
            _volume("Widget Monthly", "1999", preview="https://books.google.com/books?id=b"),
            _volume("Widget Monthly", "2003", preview="https://books.google.com/books?id=c"),
        ]})

    results = await GoogleBooksFetcher(client=mock_client(handler)).search("Widget Monthly")

    assert [r.url for r in results] == ["https://books.google.com/books?id=c"]


@pytest.mark.asyncio
async def test_google_books_falls_back_to_info_link(mock_client):
    def handler(request):
        return httpx.Response(200, json={"items": [
            _volume("Widget Monthly", "2010", preview=None, infoLink="https://books.google.com/info?id=z"),
            _volume("Widget Monthly", "2011", preview=None),
            {"volumeInfo": {}},
        ]})

    results = await GoogleBooksFetcher(client=mock_client(handler)).search("Widget Monthly")

    assert [r.url for r in results] == ["https://books.google.com/info?id=z"]


@pytest.mark.asyncio
async def test_google_books_no_items(mock_client):
    fetcher = GoogleBooksFetcher(client=mock_client(lambda request: httpx.Response(200, json={})))

    assert await fetcher.search("Widget Monthly") == []
    assert fetcher.warnings == []


# =============================================================================
# Reddit
# =============================================================================

def _post(title, created_utc=1420070400, permalink="/r/magazines/comments/abc/x/", selftext=""):
    return {"data": {
        "title": title,
        "created_utc": created_utc,
        "permalink": permalink,
        "selftext": selftext,
    }}


@pytest.mark.asyncio
async def test_reddit_queries_each_community_in_order(mock_client, fake_clock):
    paths = []

    def handler(request):
        paths.append(request.url.path)
        community = request.url.path.split("/")[2]
        return httpx.Response(200, json={"data": {"children": [
            _post("Widget Monthly 2015 scans", permalink=f"/r/{community}/comments/1/wm/",
                  selftext="x" * 500),
            _post("Something else", permalink=f"/r/{community}/comments/2/se/"),
        ]}})

    fetcher = RedditFetcher(client=mock_client(handler))
    results = await fetcher.search("Widget Monthly")

    assert paths == [f"/r/{c}/search.json" for c in RedditFetcher.COMMUNITIES]
    assert [r.source for r in results] == [f"reddit/r/{c}" for c in RedditFetcher.COMMUNITIES]
    first = results[0]
    assert first.url == "https://reddit.com/r/magazines/comments/1/wm/"
    assert first.year == "2015"
    assert len(first.description) == 200
    assert fake_clock.sleeps == [2.0] * len(RedditFetcher.COMMUNITIES)


@pytest.mark.asyncio
async def test_reddit_failed_community_is_skipped_and_still_paced(mock_client, fake_clock):
    def handler(request):
        if "/r/archival/" in request.url.path:
            raise httpx.ConnectError("boom", request=request)
        return httpx.Response(200, json={"data": {"children": [_post("Widget Monthly")]}})

    fetcher = RedditFetcher(client=mock_client(handler))
    results = await fetcher.search("Widget Monthly")

    assert len(results) == len(RedditFetcher.COMMUNITIES) - 1
    assert [w.unit for w in fetcher.warnings] == ["r/archival"]
    assert len(fake_clock.sleeps) == len(RedditFetcher.COMMUNITIES)


@pytest.mark.asyncio
async def test_reddit_year_outside_window_is_unknown(mock_client, fake_clock):
    def handler(request):
        # 1995-06-01 and 2031-01-01
        return httpx.Response(200, json={"data": {"children": [
            _post("Widget Monthly old", created_utc=801964800, permalink="/r/a/1/"),
            _post("Widget Monthly new", created_utc=1924992000, permalink="/r/a/2/"),
            _post("Widget Monthly broken", created_utc="n/a", permalink="/r/a/3/"),
        ]}})

    fetcher = RedditFetcher(client=mock_client(handler))
    fetcher.COMMUNITIES = ["magazines"]
    results = await fetcher.search("Widget Monthly")

    assert [r.year for r in results] == [UNKNOWN_YEAR] * 3
