from graphql import GraphQLList, GraphQLNonNull

from overfetch.applications import create_app
from overfetch.data import STORE, Store
from overfetch.schema import schema


class CountingStore(Store):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lookups = 0

    def find_post(self, post_id):
        self.lookups += 1
        return super().find_post(post_id)


def test_post_fields_are_non_null():
    post_type = schema.get_type('Post')
    for name in ('id', 'title', 'content', 'likes'):
        assert isinstance(post_type.fields[name].type, GraphQLNonNull)


def test_user_posts_is_nullable_list():
    posts_field = schema.get_type('User').fields['posts']
    assert isinstance(posts_field.type, GraphQLList)


def test_post_id_argument_required():
    post_field = schema.query_type.fields['post']
    assert isinstance(post_field.args['id'].type, GraphQLNonNull)
    assert not isinstance(schema.query_type.fields['user'].args['id'].type, GraphQLNonNull)


def test_post_by_id_for_every_fixture_post(run_query):
    for post in STORE.posts:
        result = run_query('query ($id: String!) { post(id: $id) { id title content likes } }',
                           variable_values={'id': post.id})
        assert result.errors is None
        assert result.data == {
            'post': {'id': post.id, 'title': post.title, 'content': post.content, 'likes': post.likes}
        }


def test_post_not_found_is_null(run_query):
    result = run_query('{ post(id: "99") { title } }')
    assert result.errors is None
    assert result.data == {'post': None}


def test_user_not_found_is_null(run_query):
    result = run_query('{ user(id: "99") { name } }')
    assert result.errors is None
    assert result.data == {'user': None}


def test_user_without_id_is_first_user(run_query):
    single = run_query('{ user { id name email phone } }')
    listed = run_query('{ users { id name email phone } }')
    assert single.data['user'] == listed.data['users'][0]


def test_user_with_empty_id_is_first_user(run_query):
    result = run_query('{ user(id: "") { name } }')
    assert result.data == {'user': {'name': 'John Doe'}}


def test_users_in_load_order(run_query):
    result = run_query('{ users { id } }')
    ids = [user['id'] for user in result.data['users']]
    assert ids == ['1', '2', '3']
    assert len(set(ids)) == len(ids)


def test_posts_in_load_order(run_query):
    result = run_query('{ posts { id } }')
    assert [post['id'] for post in result.data['posts']] == ['1', '2', '3', '4', '5']


def test_user_posts_follow_post_ids(run_query):
    result = run_query('{ user(id: "1") { posts { id } } }')
    assert result.data == {'user': {'posts': [{'id': '1'}, {'id': '2'}, {'id': '3'}]}}


def test_user_posts_drop_dangling_ids(run_query, dangling_store):
    result = run_query('{ users { id posts { title } } }', store=dangling_store)
    assert result.errors is None
    assert result.data == {
        'users': [
            {'id': 'u1', 'posts': [{'title': 'Second'}, {'title': 'First'}]},
            {'id': 'u2', 'posts': []},
        ]
    }


def test_only_requested_fields_returned(run_query):
    result = run_query('{ user(id: "2") { name posts { title } } }')
    assert result.data == {
        'user': {
            'name': 'Jane Smith',
            'posts': [
                {'title': 'Optimizing API Performance'},
                {'title': 'The Future of Mobile Development'},
            ],
        }
    }


def test_post_without_id_rejected_before_lookup(run_query):
    store = CountingStore(STORE.posts, STORE.users)
    result = run_query('{ post { title } }', store=store)
    assert result.data is None
    assert result.errors
    assert store.lookups == 0


def test_unknown_field_rejected(run_query):
    result = run_query('{ post(id: "1") { author } }')
    assert result.data is None
    assert 'author' in result.errors[0].message


def test_resolvers_registered():
    for field in ('user', 'users', 'post', 'posts'):
        assert schema.query_type.fields[field].resolve is not None
    assert schema.get_type('User').fields['posts'].resolve is not None


def test_app_serves_module_schema(settings):
    assert create_app(settings).schema is schema
