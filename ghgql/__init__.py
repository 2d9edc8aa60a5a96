from .applications import GraphQL, create_app
from .config import Settings
from .errors import GhGqlError, MissingLoginError, UpstreamFetchError
from .registry import FieldKind, FieldSpec, TypeRegistry, make_user_registry, resolve_field
from .schema import execute_query, make_schema
from .upstream import GitHubUserClient

__all__ = [
    'GraphQL',
    'create_app',
    'Settings',
    'GhGqlError',
    'MissingLoginError',
    'UpstreamFetchError',
    'FieldKind',
    'FieldSpec',
    'TypeRegistry',
    'make_user_registry',
    'resolve_field',
    'execute_query',
    'make_schema',
    'GitHubUserClient',
]
