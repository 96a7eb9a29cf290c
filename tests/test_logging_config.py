"""Structured logging helpers."""

import json
import logging

from stilo_app.logging_config import (
    CORRELATION_ID,
    JsonFormatter,
    correlation_context,
    operation_context,
    redact_for_log,
)


def test_redaction_shortens_images_and_hides_locations() -> None:
    image = "data:image/png;base64," + "A" * 500

    scrubbed = redact_for_log({"location": "Paris", "items": [{"imageUrl": image, "item": "Scarf"}]})

    assert scrubbed["location"] == "[redacted]"
    assert scrubbed["items"][0]["item"] == "Scarf"
    assert len(scrubbed["items"][0]["imageUrl"]) < 100
    assert scrubbed["items"][0]["imageUrl"].startswith("data:image/png;base64,")


def test_formatter_emits_json_with_correlation_id() -> None:
    record = logging.LogRecord("stilo", logging.INFO, __file__, 1, "outfit_generation_started", None, None)
    record.event = "outfit_generation_started"
    record.occasion = "office"

    with correlation_context("corr-123"):
        payload = json.loads(JsonFormatter().format(record))

    assert payload["event"] == "outfit_generation_started"
    assert payload["correlation_id"] == "corr-123"
    assert payload["occasion"] == "office"


def test_operation_context_restores_previous_id() -> None:
    with correlation_context("outer"):
        with operation_context("inner-op") as scoped:
            assert scoped != "outer"
            assert CORRELATION_ID.get() == scoped
        assert CORRELATION_ID.get() == "outer"
