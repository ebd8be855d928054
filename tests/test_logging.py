import json
import logging
from unittest.mock import patch

import pytest

from observability import build_log_context, configure_logging, log_event
from observability import logging as obs_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    configure_logging("info", "txgen")


def _emitted(log):
    return [json.loads(c.args[1]) for c in log.call_args_list]


def test_service_name_comes_from_configuration():
    configure_logging("info", "txgen-eu")
    with patch.object(obs_logging._logger, "log") as log:
        log_event("tx_generated", ctx=build_log_context(component="generator"), data={"chain_id": 1})
    event, = _emitted(log)
    assert event["service"] == "txgen-eu"
    assert event["component"] == "generator"
    assert event["data"] == {"chain_id": 1}


def test_level_comes_from_configuration():
    configure_logging("warning", "txgen")
    with patch.object(obs_logging._logger, "log") as log:
        log_event("tx_generated")
        log_event("tx_generation_failed", level=logging.ERROR)
    assert [e["event"] for e in _emitted(log)] == ["tx_generation_failed"]


def test_context_drops_unset_fields():
    assert build_log_context(component="hasher", request_id=None) == {"component": "hasher"}
