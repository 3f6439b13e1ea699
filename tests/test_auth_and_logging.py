import logging
import sys

import pytest
from google.auth.exceptions import DefaultCredentialsError

from gce_disk_claim.core import auth
from gce_disk_claim.core.exceptions import AuthenticationError
from gce_disk_claim.utils.logger import CleanFormatter, setup_logging


def test_missing_credentials_raise_authentication_error(monkeypatch):
    def _no_credentials(scopes=None):
        raise DefaultCredentialsError("Could not automatically determine credentials")

    monkeypatch.setattr(auth.google.auth, 'default', _no_credentials)

    with pytest.raises(AuthenticationError) as exc_info:
        auth.AuthManager().get_client()

    assert exc_info.value.fix


def test_client_is_built_once(monkeypatch):
    built = []
    monkeypatch.setattr(auth.google.auth, 'default', lambda scopes=None: (object(), 'p'))
    monkeypatch.setattr(auth.discovery, 'build', lambda *args, **kwargs: built.append(args) or 'compute')

    manager = auth.AuthManager()

    assert manager.get_client() == 'compute'
    assert manager.get_client() == 'compute'
    assert built == [('compute', 'v1')]


def test_clean_formatter_appends_traceback():
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord('gce_disk_claim', logging.ERROR, __file__, 1,
                                   "Disk claim failed", None, sys.exc_info())

    formatted = CleanFormatter('%(message)s').format(record)

    assert formatted.startswith("[X] ERROR: Disk claim failed")
    assert "ValueError: boom" in formatted


def test_setup_logging_writes_log_file(tmp_path):
    log_file = tmp_path / 'logs' / 'claim.log'

    logger = setup_logging('INFO', log_file=str(log_file))
    logger.info("Claiming disk")
    for handler in logger.handlers:
        handler.flush()

    assert "Claiming disk" in log_file.read_text()
