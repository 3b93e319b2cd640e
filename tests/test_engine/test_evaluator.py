"""Tests for AttributeEvaluator."""

import pytest

from check_http_xml.engine.evaluator import AttributeEvaluator
from check_http_xml.engine.paths import parse_path
from check_http_xml.engine.thresholds import parse_range
from check_http_xml.utils.errors import ConfigError
from check_http_xml.utils.metrics import (
    AttributeFailure,
    AttributeResult,
    AttributeSpec,
    FailureKind,
)
from check_http_xml.utils.status import Status


def make_spec(path, warning=None, critical=None, divisor=1):
    return AttributeSpec(
        path=parse_path(path),
        warning=parse_range(warning) if warning is not None else None,
        critical=parse_range(critical) if critical is not None else None,
        divisor=divisor,
    )


@pytest.fixture
def evaluator(logger):
    return AttributeEvaluator(logger)


class TestEvaluate:
    """Test suite for AttributeEvaluator.evaluate."""

    def test_ok(self, evaluator, stats_document):
        result = evaluator.evaluate(stats_document, make_spec("{shares}->{dead}", ":5", ":10"))

        assert isinstance(result, AttributeResult)
        assert result.status == Status.OK
        assert result.raw_value == 2
        assert result.value == 2

    def test_warning(self, evaluator):
        document = {"shares": {"dead": 7}}
        result = evaluator.evaluate(document, make_spec("{shares}->{dead}", ":5", ":10"))
        assert result.status == Status.WARNING

    def test_critical(self, evaluator):
        document = {"shares": {"dead": "11"}}
        result = evaluator.evaluate(document, make_spec("{shares}->{dead}", ":5", ":10"))
        assert result.status == Status.CRITICAL
        assert result.raw_value == 11

    def test_string_values_are_coerced(self, evaluator):
        document = {"ping": {"ns2:elapsedMs": " 37.5 "}}
        result = evaluator.evaluate(document, make_spec('{ping}->{"ns2:elapsedMs"}', "50", "100"))
        assert result.value == 37.5
        assert result.status == Status.OK

    def test_missing_value(self, evaluator, stats_document):
        result = evaluator.evaluate(stats_document, make_spec("{shares}->{zombie}", ":5", ":10"))

        assert isinstance(result, AttributeFailure)
        assert result.kind == FailureKind.MISSING_VALUE
        assert "{shares}->{zombie}" in result.describe()

    @pytest.mark.parametrize("value", ["n/a", "", None, True, {"nested": 1}, [1, 2], "1e999"])
    def test_not_numeric(self, evaluator, value):
        result = evaluator.evaluate({"value": value}, make_spec("{value}", "5", "10"))

        assert isinstance(result, AttributeFailure)
        assert result.kind == FailureKind.NOT_NUMERIC
        assert "not numeric" in result.describe()

    def test_value_too_large_to_divide(self, evaluator):
        result = evaluator.evaluate({"v": "9" * 400}, make_spec("{v}", "5", "10", divisor=3))

        assert isinstance(result, AttributeFailure)
        assert result.kind == FailureKind.NOT_NUMERIC

    def test_divisor_applied(self, evaluator):
        document = {"memory": {"used": "3500000"}}
        result = evaluator.evaluate(document, make_spec("{memory}->{used}", "3", "4", divisor=1000000))

        assert result.raw_value == 3500000
        assert result.value == 3.5
        assert result.status == Status.WARNING

    @pytest.mark.parametrize("raw,divisor", [(7, 2), (250, 100), (1, 0.1), (-30, 3)])
    def test_divisor_is_linear(self, evaluator, raw, divisor):
        scaled = evaluator.evaluate({"v": raw}, make_spec("{v}", "2:5", "0:20", divisor=divisor))
        prescaled = evaluator.evaluate({"v": raw / divisor}, make_spec("{v}", "2:5", "0:20"))
        assert scaled.status == prescaled.status
        assert scaled.value == pytest.approx(prescaled.value)

    def test_no_thresholds(self, evaluator):
        result = evaluator.evaluate({"v": -5}, make_spec("{v}"))
        assert result.status == Status.OK

    def test_zero_divisor_rejected_at_setup(self):
        with pytest.raises(ConfigError):
            make_spec("{v}", divisor=0)


class TestEvaluateAll:
    """Test suite for AttributeEvaluator.evaluate_all."""

    def test_sorted_by_path_text(self, evaluator, stats_document):
        specs = [
            make_spec("{shares}->{live}"),
            make_spec("{clients}->{connected}"),
            make_spec("{shares}->{dead}"),
        ]
        outcomes = evaluator.evaluate_all(stats_document, specs)
        assert [str(o.spec.path) for o in outcomes] == [
            "{clients}->{connected}", "{shares}->{dead}", "{shares}->{live}"
        ]

    def test_keeps_going_after_failure(self, evaluator, stats_document):
        specs = [
            make_spec("{aaa}", "5", "10"),
            make_spec("{shares}->{live}", "5", "10"),
        ]
        outcomes = evaluator.evaluate_all(stats_document, specs)

        assert isinstance(outcomes[0], AttributeFailure)
        assert isinstance(outcomes[1], AttributeResult)
        assert outcomes[1].status == Status.CRITICAL

    def test_reproducible(self, evaluator, stats_document):
        specs = [make_spec("{shares}->{live}"), make_spec("{shares}->{dead}")]
        assert evaluator.evaluate_all(stats_document, specs) == \
            evaluator.evaluate_all(stats_document, list(reversed(specs)))
