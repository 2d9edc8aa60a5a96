import typing

from graphql import GraphQLError


class GhGqlError(Exception):
    pass


class UpstreamFetchError(GraphQLError, GhGqlError):
    """The upstream user lookup could not produce a JSON record."""

    code = 'UPSTREAM_FETCH_ERROR'

    def __init__(self, login: str, url: str, reason: str, status_code: int = None) -> None:
        self.login = login
        self.url = url
        self.reason = reason
        self.status_code = status_code
        extensions: typing.Dict[str, typing.Any] = {'code': self.code, 'url': url}
        if status_code is not None:
            extensions['status'] = status_code
        super().__init__(f'Failed to fetch user {login!r}: {reason}', extensions=extensions)


class MissingLoginError(GraphQLError, GhGqlError):
    code = 'BAD_USER_INPUT'

    def __init__(self) -> None:
        super().__init__("Argument 'login' is required.", extensions={'code': self.code})
