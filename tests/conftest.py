import typing

import httpx
import pytest

from ghgql import GitHubUserClient, Settings, make_schema

from .data import ADA


class FakeGitHub:
    """Serves canned ``/users/{login}`` responses and records every request."""

    def __init__(self) -> None:
        self.users: typing.Dict[str, typing.Tuple[int, typing.Any]] = {}
        self.requests: typing.List[httpx.Request] = []

    def add(self, login: str, body: typing.Any, status_code: int = 200) -> None:
        self.users[login] = (status_code, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        login = request.url.path.rsplit('/', 1)[-1]
        if login not in self.users:
            return httpx.Response(404, json={'message': 'Not Found'})
        status_code, body = self.users[login]
        if isinstance(body, str):
            return httpx.Response(status_code, text=body)
        return httpx.Response(status_code, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture()
def settings():
    return Settings(api_url='https://api.github.test')


@pytest.fixture()
def github():
    fake = FakeGitHub()
    fake.add('ada', ADA)
    return fake


@pytest.fixture()
def client(settings, github):
    return GitHubUserClient(settings, transport=github.transport)


@pytest.fixture()
def schema(client):
    return make_schema(client=client)
