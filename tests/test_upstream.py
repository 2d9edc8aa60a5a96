import logging

import httpx
import pytest

from ghgql import GitHubUserClient, Settings, UpstreamFetchError

from .data import ADA


def test_user_url(settings):
    client = GitHubUserClient(settings)
    assert client.user_url('ada') == 'https://api.github.test/users/ada'
    assert GitHubUserClient().user_url('ada') == 'https://api.github.com/users/ada'


@pytest.mark.asyncio
async def test_fetch_returns_json_body(client, github):
    record = await client.fetch('ada')
    assert record == ADA
    assert len(github.requests) == 1
    request = github.requests[0]
    assert request.method == 'GET'
    assert str(request.url) == 'https://api.github.test/users/ada'
    assert request.headers['User-Agent'] == 'ghgql/0.1'


@pytest.mark.asyncio
async def test_not_found_body_passes_through(client):
    record = await client.fetch('doesnotexist')
    assert record == {'message': 'Not Found'}


@pytest.mark.asyncio
async def test_raise_for_status(github):
    settings = Settings(api_url='https://api.github.test', raise_for_status=True)
    client = GitHubUserClient(settings, transport=github.transport)
    with pytest.raises(UpstreamFetchError) as excinfo:
        await client.fetch('doesnotexist')
    assert excinfo.value.status_code == 404
    assert excinfo.value.extensions['code'] == 'UPSTREAM_FETCH_ERROR'


@pytest.mark.asyncio
async def test_non_json_body(client, github):
    github.add('html', '<html>rate limited</html>', status_code=200)
    with pytest.raises(UpstreamFetchError) as excinfo:
        await client.fetch('html')
    assert 'not valid JSON' in excinfo.value.message
    assert excinfo.value.login == 'html'


@pytest.mark.asyncio
async def test_transport_failure(settings, caplog):
    def handler(request):
        raise httpx.ConnectError('Name or service not known', request=request)

    client = GitHubUserClient(settings, transport=httpx.MockTransport(handler))
    with caplog.at_level(logging.WARNING, logger='ghgql.upstream'):
        with pytest.raises(UpstreamFetchError) as excinfo:
            await client.fetch('ada')
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)
    assert excinfo.value.url == 'https://api.github.test/users/ada'
    records = [r for r in caplog.records if r.name == 'ghgql.upstream']
    assert [r.levelno for r in records] == [logging.WARNING]
    assert 'api.github.test/users/ada' in records[0].getMessage()


@pytest.mark.asyncio
async def test_invalid_login_in_url(client, github):
    with pytest.raises(UpstreamFetchError) as excinfo:
        await client.fetch('a\x00b')
    assert excinfo.value.extensions['code'] == 'UPSTREAM_FETCH_ERROR'
    assert github.requests == []


@pytest.mark.asyncio
async def test_timeout_reaches_client(github):
    settings = Settings(api_url='https://api.github.test', http_timeout_seconds=7.5)
    async with GitHubUserClient(settings, transport=github.transport).build_client() as http:
        assert http.timeout == httpx.Timeout(7.5)
