import typing

from graphql import (
    ExecutionResult,
    GraphQLArgument,
    GraphQLField,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
    graphql,
)

from .config import Settings
from .errors import MissingLoginError
from .registry import TypeRegistry, make_user_registry
from .upstream import GitHubUserClient


def make_user_resolver(client: GitHubUserClient) -> typing.Callable:
    async def resolve_user(parent, info, login: str = None) -> typing.Any:
        if login is None:
            raise MissingLoginError()
        return await client.fetch(login)

    return resolve_user


def make_schema(
    registry: TypeRegistry = None, client: GitHubUserClient = None, settings: Settings = None
) -> GraphQLSchema:
    registry = registry or make_user_registry()
    client = client or GitHubUserClient(settings)
    query = GraphQLObjectType(
        name='Query',
        fields={
            'user': GraphQLField(
                registry.to_graphql_type(),
                args={'login': GraphQLArgument(GraphQLString)},
                resolve=make_user_resolver(client),
            )
        },
    )
    return GraphQLSchema(query=query)


async def execute_query(
    schema: GraphQLSchema,
    query: str,
    variables: typing.Dict[str, typing.Any] = None,
    operation_name: str = None,
    context: typing.Any = None,
) -> ExecutionResult:
    return await graphql(
        schema,
        query,
        variable_values=variables,
        operation_name=operation_name,
        context_value=context,
    )
