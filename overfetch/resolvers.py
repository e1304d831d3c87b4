from typing import List, Optional

from gql import field_resolver, query
from graphql import GraphQLResolveInfo

from .data import Post, Store, User
from .logging import get_logger

logger = get_logger(__name__)


def get_store(info: GraphQLResolveInfo) -> Store:
    return info.context['store']


@query('user')
def resolve_user(_, info: GraphQLResolveInfo, id: str = None) -> Optional[User]:
    store = get_store(info)
    # no id (or an empty one) means the first user
    if not id:
        return store.first_user()
    return store.find_user(id)


@query('users')
def resolve_users(_, info: GraphQLResolveInfo) -> List[User]:
    return list(get_store(info).users)


@query('post')
def resolve_post(_, info: GraphQLResolveInfo, id: str) -> Optional[Post]:
    return get_store(info).find_post(id)


@query('posts')
def resolve_posts(_, info: GraphQLResolveInfo) -> List[Post]:
    return list(get_store(info).posts)


@field_resolver('User', 'posts')
def resolve_user_posts(user: User, info: GraphQLResolveInfo) -> List[Post]:
    # Whole Post records come back whatever sub-fields were selected;
    # graphql-core trims them to the selection afterwards.
    found = get_store(info).posts_for(user)
    logger.debug(
        'Resolved user posts',
        user_id=user.id,
        post_ids=list(user.post_ids),
        resolved=len(found),
    )
    return found
