"""Tests for the default diagnostic sink."""

import logging

from webagent.core import diagnostics
from webagent.core.diagnostics import logging_sink
from webagent.core.http_client import WebUserAgent


def test_logging_sink_uses_module_logger(caplog):
    with caplog.at_level(logging.ERROR, logger="webagent.core.diagnostics"):
        logging_sink(logging.ERROR, "Can't perform GET on http://device.local/: 503 Service Unavailable")
    assert diagnostics.logger.name == "webagent.core.diagnostics"
    assert [(r.name, r.levelno, r.getMessage()) for r in caplog.records] == [
        (
            "webagent.core.diagnostics",
            logging.ERROR,
            "Can't perform GET on http://device.local/: 503 Service Unavailable",
        )
    ]


def test_default_agent_logs_invalid_body(caplog):
    with caplog.at_level(logging.ERROR, logger="webagent.core.diagnostics"):
        result = WebUserAgent().request("http://device.local/", method="POST", data=None)
    assert result.status == 0
    assert any("Need Data param" in r.getMessage() for r in caplog.records)
