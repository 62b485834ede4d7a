import httpx
import pytest

from moodpick.core.exceptions import EmptyResultError, UpstreamError


class TestTMDBService:
    async def test_discover_sends_popularity_sorted_filtered_query(self, catalog, tmdb):
        catalog.add("/3/discover/movie", {"results": [{"id": 1}, {"id": 2}]})

        results = await tmdb.discover("28", 7, page=3)

        assert [r["id"] for r in results] == [1, 2]
        (params,) = catalog.params("/3/discover/movie")
        assert params == {
            "page": "3",
            "sort_by": "popularity.desc",
            "with_genres": "28",
            "vote_average.gte": "7",
            "api_key": "test-key",
            "language": "en-US",
        }

    @pytest.mark.parametrize("payload", [{"results": []}, {"page": 1}])
    async def test_discover_without_results_is_an_empty_result(self, catalog, tmdb, payload):
        catalog.add("/3/discover/movie", payload)

        with pytest.raises(EmptyResultError) as exc_info:
            await tmdb.discover("28", 7)

        assert exc_info.value.message == "No movies found with these criteria. Try different filters!"

    async def test_discover_non_success_status_is_upstream_error(self, catalog, tmdb):
        catalog.add("/3/discover/movie", {"status_message": "Invalid API key"}, status=401)

        with pytest.raises(UpstreamError) as exc_info:
            await tmdb.discover("28", 7)

        assert exc_info.value.status_code == 401
        assert exc_info.value.kind == "upstream"

    async def test_network_failure_is_upstream_error(self, catalog, tmdb):
        def boom(request):
            raise httpx.ConnectError("connection refused", request=request)

        catalog.add_handler("/3/movie/5", boom)

        with pytest.raises(UpstreamError) as exc_info:
            await tmdb.get_details(5)

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert exc_info.value.status_code is None

    async def test_details_are_memoized(self, catalog, tmdb):
        catalog.add("/3/movie/1", {"id": 1, "title": "X"})

        first = await tmdb.get_details(1)
        second = await tmdb.get_details(1)

        assert first == second == {"id": 1, "title": "X"}
        assert catalog.calls("/3/movie/1") == 1


class TestJikanService:
    async def test_list_anime_omits_unset_filters(self, catalog, jikan):
        catalog.add("/v4/anime", {"data": [{"mal_id": 1}]})

        items = await jikan.list_anime()

        assert items == [{"mal_id": 1}]
        (params,) = catalog.params("/v4/anime")
        assert params == {"page": "1", "limit": "25", "order_by": "popularity", "sort": "desc"}

    async def test_list_anime_sends_set_filters(self, catalog, jikan):
        catalog.add("/v4/anime", {"data": []})

        items = await jikan.list_anime(genre_id="10", rating="pg13", min_score=7.5, page=2)

        assert items == []
        (params,) = catalog.params("/v4/anime")
        assert params["genres"] == "10"
        assert params["rating"] == "pg13"
        assert params["min_score"] == "7.5"
        assert params["page"] == "2"

    async def test_get_anime_by_id_returns_record(self, catalog, jikan):
        catalog.add("/v4/anime/42", {"data": {"mal_id": 42, "title": "Y"}})

        record = await jikan.get_anime_by_id(42)

        assert record == {"mal_id": 42, "title": "Y"}

    async def test_rate_limited_response_is_not_retried(self, catalog, jikan):
        catalog.add("/v4/anime", {"message": "Too Many Requests"}, status=429)

        with pytest.raises(UpstreamError) as exc_info:
            await jikan.list_anime()

        assert exc_info.value.status_code == 429
        assert exc_info.value.message == "HTTP error! status: 429"
        assert catalog.calls("/v4/anime") == 1

    async def test_every_request_acquires_the_limiter(self, catalog, jikan):
        catalog.add("/v4/anime", {"data": []})
        catalog.add("/v4/anime/1", {"data": {"mal_id": 1}})

        await jikan.list_anime()
        first_grant = jikan.client.rate_limiter.last_grant
        await jikan.get_anime_by_id(1)

        assert first_grant is not None
        assert jikan.client.rate_limiter.last_grant >= first_grant
