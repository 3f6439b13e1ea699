import pytest

from fakes.compute import FakeCompute, http_error
from gce_disk_claim.core.exceptions import DiskNotFoundError, TransportError
from gce_disk_claim.orchestration import DiskLocator


def _locator(compute):
    return DiskLocator(compute, 'my-project', 'us-central1-a')


def test_check_disk_exists_returns_disk():
    compute = FakeCompute(disks=['data-1'])

    disk = _locator(compute).check_disk_exists('data-1')

    assert disk['name'] == 'data-1'
    assert compute.calls == [
        ('disks.get', {'project': 'my-project', 'zone': 'us-central1-a', 'disk': 'data-1'})
    ]


def test_check_disk_exists_raises_not_found():
    compute = FakeCompute(disks=[])

    with pytest.raises(DiskNotFoundError) as exc_info:
        _locator(compute).check_disk_exists('data-1')

    assert exc_info.value.disk_name == 'data-1'
    assert exc_info.value.zone == 'us-central1-a'


def test_check_disk_exists_wraps_other_api_errors():
    compute = FakeCompute(disks=['data-1'])
    compute.failures['disks.get'] = http_error(403)

    with pytest.raises(TransportError) as exc_info:
        _locator(compute).check_disk_exists('data-1')

    assert exc_info.value.step == "get disk 'data-1'"
    assert exc_info.value.__cause__ is exc_info.value.cause


def test_find_attached_instance_matches_device_name():
    compute = FakeCompute(instances={
        'web-1': ['web-1'],
        'old-host': ['old-host', 'data-1'],
    })

    assert _locator(compute).find_attached_instance('data-1') == 'old-host'


def test_find_attached_instance_returns_none_when_unattached():
    compute = FakeCompute(instances={'web-1': ['web-1']})

    assert _locator(compute).find_attached_instance('data-1') is None


def test_find_attached_instance_returns_first_match():
    compute = FakeCompute(instances={'a': ['data-1'], 'b': ['data-1']})

    assert _locator(compute).find_attached_instance('data-1') == 'a'


def test_find_attached_instance_follows_pages():
    compute = FakeCompute(instances={
        'web-1': ['web-1'],
        'web-2': ['web-2'],
        'old-host': ['data-1'],
    }, page_size=1)

    assert _locator(compute).find_attached_instance('data-1') == 'old-host'
    assert compute.methods() == ['instances.list'] * 3


def test_find_attached_instance_wraps_list_errors():
    compute = FakeCompute(instances={'web-1': []})
    compute.failures['instances.list'] = OSError("connection reset")

    with pytest.raises(TransportError):
        _locator(compute).find_attached_instance('data-1')
