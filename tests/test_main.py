import pytest

from fakes.compute import FakeCompute
from fakes.metadata import FakeMetadataHttp
from gce_disk_claim import main as main_module
from gce_disk_claim.core.config import ClaimOptions
from gce_disk_claim.core.metadata import MetadataReader
from gce_disk_claim.main import claim_disk


def _metadata(http=None):
    return MetadataReader(http=http or FakeMetadataHttp())


@pytest.mark.parametrize('options', [
    ClaimOptions(disk_name=''),
    ClaimOptions(disk_name='data-1', require_mount_path=True, mount_path=''),
])
def test_invalid_options_make_no_calls(options, capsys):
    compute = FakeCompute(disks=['data-1'])
    http = FakeMetadataHttp()

    assert claim_disk(options, compute=compute, metadata=_metadata(http)) is None

    assert compute.calls == []
    assert http.requests == []
    out = capsys.readouterr().out
    assert "Invalid flag" in out
    assert "Traceback" in out


def test_claim_disk_moves_disk(capsys):
    compute = FakeCompute(disks=['data-1'], instances={'old-host': ['data-1'], 'new-host': []})
    sleeps = []

    result = claim_disk(ClaimOptions(disk_name='data-1'), compute=compute,
                        metadata=_metadata(), sleep=sleeps.append)

    assert result.previous_holder == 'old-host'
    assert result.instance_name == 'new-host'
    assert compute.instances_store == {'old-host': [], 'new-host': ['data-1']}
    assert "Disk data-1 attached to new-host" in capsys.readouterr().out


def test_claim_disk_reports_missing_disk(capsys):
    compute = FakeCompute(disks=[])

    assert claim_disk(ClaimOptions(disk_name='data-1'), compute=compute,
                      metadata=_metadata()) is None

    assert compute.methods() == ['disks.get']
    out = capsys.readouterr().out
    assert "Disk claim failed" in out
    assert "Disk 'data-1' not found" in out


def test_claim_disk_stops_when_metadata_fails():
    compute = FakeCompute(disks=['data-1'])

    result = claim_disk(ClaimOptions(disk_name='data-1'), compute=compute,
                        metadata=_metadata(FakeMetadataHttp(status=500)))

    assert result is None
    assert compute.calls == []


def test_claim_disk_builds_client_from_default_credentials(monkeypatch):
    compute = FakeCompute(disks=['data-1'], instances={'new-host': ['data-1']})

    class _FakeAuthManager:
        def get_client(self):
            return compute

    monkeypatch.setattr(main_module, 'AuthManager', _FakeAuthManager)

    result = claim_disk(ClaimOptions(disk_name='data-1'), metadata=_metadata())

    assert result.action == 'noop'
