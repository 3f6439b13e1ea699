import json

import pytest
import yaml

from gce_disk_claim import cli
from gce_disk_claim.orchestration import ClaimResult


def _parse(argv):
    return cli.create_parser().parse_args(argv)


def test_claim_defaults_wait_and_skip_when_held():
    options = cli.args_to_claim_options(_parse(['claim', '--disk', 'data-1']))

    assert options.disk_name == 'data-1'
    assert options.wait_for_completion is True
    assert options.reattach_if_held is False
    assert options.require_mount_path is False
    assert options.poll_interval == 5
    assert options.max_wait is None


def test_claim_mount_defaults_fire_and_forget():
    args = _parse(['claim-mount', '--disk', 'data-1', '--path', '/mnt/data'])
    options = cli.args_to_claim_options(args)

    assert options.mount_path == '/mnt/data'
    assert options.require_mount_path is True
    assert options.wait_for_completion is False
    assert options.reattach_if_held is True


def test_behavior_flags_override_defaults():
    claim = cli.args_to_claim_options(_parse(
        ['claim', '--disk', 'd', '--no-wait', '--always-reattach', '--max-wait', '60']))
    mount = cli.args_to_claim_options(_parse(
        ['claim-mount', '--disk', 'd', '--path', '/p', '--wait', '--skip-if-held']))

    assert (claim.wait_for_completion, claim.reattach_if_held, claim.max_wait) == (False, True, 60)
    assert (mount.wait_for_completion, mount.reattach_if_held) == (True, False)


def test_missing_disk_flag_is_left_to_validation():
    options = cli.args_to_claim_options(_parse(['claim']))

    assert options.disk_name == ''


def test_main_returns_1_on_failure(monkeypatch):
    monkeypatch.setattr(cli, 'claim_disk', lambda options: None)

    assert cli.main(['claim', '--disk', 'data-1']) == 1


@pytest.mark.parametrize('fmt, load', [('json', json.loads), ('yaml', yaml.safe_load)])
def test_main_prints_result(monkeypatch, capsys, fmt, load):
    result = ClaimResult(disk_name='data-1', instance_name='new-host',
                         previous_holder='old-host', action='detach-attach')
    monkeypatch.setattr(cli, 'claim_disk', lambda options: result)

    assert cli.main(['claim', '--disk', 'data-1', '--format', fmt]) == 0

    printed = load(capsys.readouterr().out)
    assert printed['previousHolder'] == 'old-host'
    assert printed['action'] == 'detach-attach'


def test_main_prints_nothing_by_default(monkeypatch, capsys):
    result = ClaimResult(disk_name='data-1', instance_name='new-host',
                         previous_holder=None, action='attach')
    monkeypatch.setattr(cli, 'claim_disk', lambda options: result)

    assert cli.main(['claim', '--disk', 'data-1']) == 0
    assert capsys.readouterr().out == ''
