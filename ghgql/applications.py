import json
import logging
import traceback
import typing

from graphql import GraphQLError, GraphQLSchema, Middleware, graphql
from starlette import status
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import BaseRoute, Route
from starlette.types import Receive, Scope, Send

from .config import Settings
from .schema import make_schema

ERROR_FORMATER = typing.Callable[[GraphQLError], typing.Dict[str, typing.Any]]

logger = logging.getLogger(__name__)


class GraphQL(Starlette):
    def __init__(
        self,
        schema: GraphQLSchema,
        *,
        debug: bool = False,
        routes: typing.List[BaseRoute] = None,
        path: str = '/',
        error_formater: ERROR_FORMATER = None,
        graphql_middleware: Middleware = None,
        context_builder: typing.Callable = None,
        **kwargs,
    ):
        routes = routes or []
        self.schema = schema
        routes.append(
            Route(
                path,
                ASGIApp(
                    self.schema,
                    debug=debug,
                    error_formater=error_formater,
                    graphql_middleware=graphql_middleware,
                    context_builder=context_builder,
                ),
            )
        )
        super().__init__(debug=debug, routes=routes, **kwargs)


class ASGIApp:
    def __init__(
        self,
        schema: GraphQLSchema,
        debug: bool = False,
        error_formater: ERROR_FORMATER = None,
        graphql_middleware: Middleware = None,
        context_builder: typing.Callable = None,
    ) -> None:
        self.schema = schema
        self.error_formater = error_formater or self.format_error
        self.debug = debug
        self.middleware = graphql_middleware
        self.context_builder = context_builder

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive=receive, send=send)
        response = await self.handle_graphql(request)
        await response(scope, receive, send)

    def format_error(self, error: GraphQLError) -> typing.Dict[str, typing.Any]:
        if not error:
            raise ValueError("Received null or undefined error.")
        formatted = dict(
            message=error.message or "An unknown error occurred.",
            locations=[loc._asdict() for loc in error.locations] if error.locations else None,
            path=error.path,
        )
        extensions = dict(error.extensions or {})
        if self.debug and error.original_error:
            original_error = error.original_error
            exception = dict(extensions.get('exception', {}))
            exception['traceback'] = traceback.format_exception(
                type(original_error), original_error, original_error.__traceback__
            )
            extensions['exception'] = exception
        if extensions:
            formatted.update(extensions=extensions)
        return formatted

    async def handle_graphql(self, request: Request) -> Response:
        if request.method in ('GET', 'HEAD'):
            data = request.query_params  # type: typing.Mapping[str, typing.Any]

        elif request.method == 'POST':
            content_type = request.headers.get('Content-Type', '')

            if 'application/json' in content_type:
                try:
                    data = await request.json()
                except ValueError:
                    return PlainTextResponse(
                        'Request body is not valid JSON', status_code=status.HTTP_400_BAD_REQUEST,
                    )
            elif 'application/graphql' in content_type:
                body = await request.body()
                data = {'query': body.decode()}
            elif 'query' in request.query_params:
                data = request.query_params
            else:
                return PlainTextResponse(
                    'Unsupported Media Type', status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                )
        else:
            return PlainTextResponse(
                'Method Not Allowed', status_code=status.HTTP_405_METHOD_NOT_ALLOWED
            )

        try:
            query = data['query']
            variables = data.get('variables')
            operation_name = data.get('operationName')
        except (KeyError, TypeError, AttributeError):
            return PlainTextResponse(
                'No GraphQL query found in the request', status_code=status.HTTP_400_BAD_REQUEST,
            )
        if not isinstance(query, str):
            return PlainTextResponse(
                'No GraphQL query found in the request', status_code=status.HTTP_400_BAD_REQUEST,
            )

        if isinstance(variables, str):
            try:
                variables = json.loads(variables)
            except ValueError:
                return PlainTextResponse(
                    'Variables are invalid JSON', status_code=status.HTTP_400_BAD_REQUEST,
                )
        if variables is not None and not isinstance(variables, dict):
            return PlainTextResponse(
                'Variables must be a JSON object', status_code=status.HTTP_400_BAD_REQUEST,
            )

        context = self.context_builder() if self.context_builder else {}
        context.update(request=request)

        result = await graphql(
            self.schema,
            query,
            variable_values=variables,
            operation_name=operation_name,
            context_value=context,
            middleware=self.middleware,
        )
        if result.errors:
            for err in result.errors:
                logger.debug('GraphQL execution error: %s', err.message)
        error_data = [self.error_formater(err) for err in result.errors] if result.errors else None
        response_data = {'data': result.data, 'errors': error_data}

        return JSONResponse(response_data, status_code=status.HTTP_200_OK)


def create_app(settings: Settings = None, **kwargs) -> GraphQL:
    settings = settings or Settings()
    schema = kwargs.pop('schema', None) or make_schema(settings=settings)
    return GraphQL(schema, debug=settings.debug, path=settings.path, **kwargs)
