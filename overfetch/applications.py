import json
import traceback
import typing

from gql.playground import PLAYGROUND_HTML
from graphql import GraphQLError, GraphQLSchema, Middleware, graphql
from starlette import status
from starlette.applications import Starlette
from starlette.middleware import Middleware as ASGIMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from starlette.routing import BaseRoute, Route
from starlette.types import Receive, Scope, Send

from .config import Settings, settings as default_settings
from .data import STORE, Store
from .logging import get_logger
from .middleware import RequestLoggingMiddleware
from .schema import schema as default_schema

logger = get_logger(__name__)

ERROR_FORMATER = typing.Callable[[GraphQLError], typing.Dict[str, typing.Any]]


class PrettyJSONResponse(JSONResponse):
    def render(self, content: typing.Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, allow_nan=False, indent=2).encode('utf-8')


class RequestError(Exception):
    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GraphQL(Starlette):
    def __init__(
        self,
        schema: GraphQLSchema = None,
        *,
        store: Store = STORE,
        playground: bool = True,
        pretty: bool = False,
        debug: bool = False,
        routes: typing.List[BaseRoute] = None,
        path: str = '/graphql',
        error_formater: ERROR_FORMATER = None,
        graphql_middleware: Middleware = None,
        context_builder: typing.Callable = None,
        **kwargs,
    ):
        routes = routes or []
        self.schema = schema or default_schema
        self.store = store

        routes.append(
            Route(
                path,
                ASGIApp(
                    self.schema,
                    debug=debug,
                    playground=playground,
                    pretty=pretty,
                    error_formater=error_formater,
                    graphql_middleware=graphql_middleware,
                    context_builder=context_builder or self.build_context,
                ),
            )
        )
        super().__init__(debug=debug, routes=routes, **kwargs)

    def build_context(self) -> typing.Dict[str, typing.Any]:
        return {'store': self.store}


class ASGIApp:
    def __init__(
        self,
        schema: GraphQLSchema,
        debug: bool = False,
        playground: bool = True,
        pretty: bool = False,
        error_formater: ERROR_FORMATER = None,
        graphql_middleware: Middleware = None,
        context_builder: typing.Callable = None,
    ) -> None:
        self.schema = schema
        self.playground = playground
        self.response_class = PrettyJSONResponse if pretty else JSONResponse
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
            raise ValueError('Received null or undefined error.')
        formatted = error.formatted
        if self.debug and error.original_error:
            original_error = error.original_error
            extensions = dict(formatted.get('extensions') or {})
            exception = dict(extensions.get('exception') or {})
            exception['traceback'] = traceback.format_exception(
                type(original_error), original_error, original_error.__traceback__
            )
            extensions['exception'] = exception
            formatted['extensions'] = extensions
        return formatted

    def error_response(self, message: str, status_code: int) -> Response:
        return self.response_class({'errors': [{'message': message}]}, status_code=status_code)

    async def parse_request(self, request: Request) -> typing.Mapping[str, typing.Any]:
        if request.method in ('GET', 'HEAD'):
            return request.query_params

        content_type = request.headers.get('Content-Type', '')
        if 'application/json' in content_type:
            try:
                data = await request.json()
            except ValueError:
                raise RequestError('POST body sent invalid JSON.') from None
            if not isinstance(data, dict):
                raise RequestError('POST body must be a JSON object.')
            return data
        if 'application/graphql' in content_type:
            body = await request.body()
            try:
                return {'query': body.decode()}
            except UnicodeDecodeError:
                raise RequestError('POST body is not valid UTF-8.') from None
        if 'query' in request.query_params:
            return request.query_params
        raise RequestError(
            'Unsupported Media Type', status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
        )

    async def handle_graphql(self, request: Request) -> Response:
        if request.method in ('GET', 'HEAD'):
            if 'text/html' in request.headers.get('Accept', ''):
                if not self.playground:
                    return PlainTextResponse('Not Found', status_code=status.HTTP_404_NOT_FOUND)
                return HTMLResponse(PLAYGROUND_HTML)
        elif request.method != 'POST':
            return PlainTextResponse(
                'Method Not Allowed',
                status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
                headers={'Allow': 'GET, POST'},
            )

        try:
            data = await self.parse_request(request)
            query = data.get('query')
            if not query or not isinstance(query, str):
                raise RequestError('Must provide query string.')
            variables = data.get('variables')
            if isinstance(variables, str):
                try:
                    variables = json.loads(variables) if variables else None
                except ValueError:
                    raise RequestError('Variables are invalid JSON.') from None
            if variables is not None and not isinstance(variables, dict):
                raise RequestError('Variables must be a JSON object.')
            operation_name = data.get('operationName')
        except RequestError as exc:
            logger.info('Rejected GraphQL request', reason=exc.message, status_code=exc.status_code)
            return self.error_response(exc.message, exc.status_code)

        logger.info('Incoming query', query=query.strip(), operation_name=operation_name)

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

        response_data: typing.Dict[str, typing.Any] = {}
        status_code = status.HTTP_200_OK
        if result.errors:
            response_data['errors'] = [self.error_formater(err) for err in result.errors]
        if result.data is None and result.errors:
            # parse and validation failures never reach resolution
            status_code = status.HTTP_400_BAD_REQUEST
        else:
            response_data = {'data': result.data, **response_data}

        return self.response_class(response_data, status_code=status_code)


async def health(request: Request) -> Response:
    return JSONResponse({'status': 'ok', 'message': 'GraphQL server is running'})


def create_app(settings: Settings = None, store: Store = STORE) -> GraphQL:
    settings = settings or default_settings
    return GraphQL(
        store=store,
        playground=settings.playground,
        pretty=settings.pretty,
        debug=settings.debug,
        path=settings.graphql_path,
        routes=[Route('/health', health, methods=['GET'])],
        middleware=[
            ASGIMiddleware(
                CORSMiddleware,
                allow_origins=settings.cors_origins,
                allow_methods=['*'],
                allow_headers=['*'],
            ),
            ASGIMiddleware(RequestLoggingMiddleware),
        ],
    )
