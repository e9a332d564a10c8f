from collections import Counter

import pytest

from smartmap.engine import resolver
from smartmap.env import SmartMapConfig

USERS = {1: 'ada', 2: 'grace'}
EMAILS = {'ada': 'ada@example.com', 'grace': 'grace@example.com'}


@pytest.fixture
def calls() -> Counter:
    return Counter()


@pytest.fixture
def users_config(calls: Counter) -> SmartMapConfig:
    """Resolvers for a small user directory, counting how often each one runs."""

    @resolver(inputs=['user/id'], outputs=['user/name'], name='user-name')
    def user_name(data):
        calls['user-name'] += 1
        uid = data['user/id']
        if uid not in USERS:
            return {}
        # user/login comes along for free
        return {'user/name': USERS[uid], 'user/login': USERS[uid].upper()}

    @resolver(inputs=['user/name'], outputs=['user/email'], name='user-email')
    def user_email(data):
        calls['user-email'] += 1
        return {'user/email': EMAILS[data['user/name']]}

    @resolver(inputs=['user/id'], outputs=['user/profile'], name='user-profile')
    def user_profile(data):
        calls['user-profile'] += 1
        return {'user/profile': {'user/id': data['user/id'] + 1, 'tags': ['a', 'b'], 'roles': {'admin'}}}

    @resolver(inputs=['user/id'], outputs=['user/broken'], name='user-broken')
    def user_broken(data):
        raise RuntimeError('database is down')

    return SmartMapConfig.of(user_name, user_email, user_profile, user_broken)
