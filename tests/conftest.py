import pytest
from graphql import graphql_sync
from starlette.testclient import TestClient

from overfetch.applications import create_app
from overfetch.config import Settings
from overfetch.data import STORE, Post, Store, User
from overfetch.schema import schema


@pytest.fixture
def settings():
    return Settings(debug=False, playground=True, pretty=False, graphql_path='/graphql')


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def dangling_store():
    return Store(
        posts=[
            Post(id='a', title='First', content='first post', likes=1),
            Post(id='b', title='Second', content='second post', likes=2),
        ],
        users=[
            User(
                id='u1',
                name='Dana',
                email='dana@example.com',
                phone='+1-555-000-0000',
                post_ids=('b', 'missing', 'a'),
            ),
            User(id='u2', name='Eli', email='eli@example.com', phone='+1-555-000-0001'),
        ],
    )


@pytest.fixture
def run_query():
    def run(source, store=STORE, **kwargs):
        return graphql_sync(schema, source, context_value={'store': store}, **kwargs)

    return run
