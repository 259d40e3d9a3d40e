import logging

import pytest

from reviewers_by_blame.core.utils.logging import log_operation


def test_log_operation_records_context_added_in_block(caplog):
    with caplog.at_level(logging.INFO, logger="reviewers_by_blame.core.utils.logging"):
        with log_operation("reviewers_by_blame", subject_ids={"repo": "o/r"}, revision="abc") as ctx:
            ctx["reviewers"] = ["alice"]

    completed = caplog.records[-1]
    assert "completed" in completed.getMessage()
    assert completed.context["repo"] == "o/r"
    assert completed.context["reviewers"] == ["alice"]
    assert "latency_ms" in completed.context


def test_log_operation_reraises_errors(caplog):
    with pytest.raises(RuntimeError):
        with log_operation("reviewers_by_blame"):
            raise RuntimeError("boom")

    assert caplog.records[-1].levelno == logging.ERROR
    assert caplog.records[-1].context["error"] == "boom"
