import uvicorn

from .applications import create_app
from .config import settings
from .logging import configure_logging, get_logger

logger = get_logger(__name__)

EXAMPLE_QUERY = '''{
  user {
    id
    name
    email
    phone
    posts {
      title
      content
      likes
    }
  }
}'''


def main() -> None:
    configure_logging(debug=settings.debug, level=settings.log_level)
    app = create_app(settings)

    base_url = f'http://localhost:{settings.port}'
    logger.info(
        'GraphQL server starting',
        graphql_url=f'{base_url}{settings.graphql_path}',
        health_url=f'{base_url}/health',
        host=settings.host,
        port=settings.port,
    )
    # A mobile client may only want names and post titles, but this
    # query shows every field the server materialises anyway.
    logger.info('Example over-fetching query', query=EXAMPLE_QUERY)

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == '__main__':
    main()
