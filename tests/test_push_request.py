"""
Tests for translating application specifications into push requests.
"""

from pathlib import Path

import pytest

from cfdeploy.deployment.manifest import ApplicationSpecification
from cfdeploy.deployment.push_request import PushRequest, to_push_request


APP_PATH = Path('/app/build/demo.jar')


def make_spec(**kw):
    base = dict(name='demo', path=APP_PATH)
    base.update(kw)
    return ApplicationSpecification(**base)


def test_copies_present_fields():
    spec = make_spec(buildpack='java_buildpack', memory=512, disk_quota=1024, instances=2)
    request = to_push_request(APP_PATH, spec)
    assert request == PushRequest(
        application=APP_PATH, name='demo', buildpack='java_buildpack',
        memory=512, disk_quota=1024, instances=2, no_start=False,
    )


def test_is_pure():
    spec = make_spec(hosts=('demo',), domains=('cfapps.io',), services=('db',))
    assert to_push_request(APP_PATH, spec) == to_push_request(APP_PATH, spec)


def test_takes_first_host_and_domain():
    spec = make_spec(hosts=('first', 'second'), domains=('a.io', 'b.io'))
    request = to_push_request(APP_PATH, spec)
    assert request.host == 'first'
    assert request.domain == 'a.io'


def test_empty_collections_are_omitted():
    request = to_push_request(APP_PATH, make_spec())
    assert request.host is None
    assert request.domain is None


def test_blank_name_and_buildpack_are_omitted():
    request = to_push_request(APP_PATH, make_spec(name='  ', buildpack=''))
    assert request.name is None
    assert request.buildpack is None


def test_accepts_string_paths():
    assert to_push_request(str(APP_PATH), make_spec()).application == APP_PATH


@pytest.mark.parametrize('services,env,no_start', [
    ((), {}, False),
    (('db',), {}, True),
    ((), {'FOO': 'bar'}, True),
    (('db',), {'FOO': 'bar'}, True),
])
def test_no_start_when_configuration_follows(services, env, no_start):
    spec = make_spec(services=services, environment_variables=env)
    assert to_push_request(APP_PATH, spec).no_start is no_start


def test_requires_specification():
    with pytest.raises(ValueError):
        to_push_request(APP_PATH, None)
