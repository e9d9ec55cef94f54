"""
Tests for response normalization across envelope and flat shapes.
"""

import json
import pytest
from ec2_estimator.domain.estimate_models import (
    EstimateFailure,
    EstimateResult,
    FailureKind,
)
from ec2_estimator.services.response_normalizer import (
    normalize_response,
    unwrap_envelope,
)


def test_envelope_body_is_unwrapped():
    """A {statusCode, body: "<json>"} envelope yields the inner body."""
    raw = json.dumps({'statusCode': 200, 'body': '{"totalMonthlyJPY":1000}'})

    outcome = normalize_response(200, True, raw)

    assert isinstance(outcome, EstimateResult)
    assert outcome.total_monthly_jpy == 1000


def test_envelope_status_code_overrides_transport_failure():
    """statusCode 200 in the envelope is success even if transport is not OK."""
    raw = json.dumps({'statusCode': 200, 'body': '{"totalMonthlyJPY":1000}'})

    outcome = normalize_response(502, False, raw, 'Bad Gateway')

    assert isinstance(outcome, EstimateResult)
    assert outcome.to_dict() == {'totalMonthlyJPY': 1000}


def test_flat_body_is_returned_unchanged():
    """A flat result with transport OK is returned verbatim."""
    body = {'instanceType': 't3.micro', 'totalMonthlyUSD': 5}

    outcome = normalize_response(200, True, json.dumps(body))

    assert isinstance(outcome, EstimateResult)
    assert outcome.to_dict() == body


def test_missing_fields_stay_absent(sample_result_body):
    """Absent fields are None, not 0."""
    del sample_result_body['exchangeRate']
    del sample_result_body['totalMonthlyJPY']

    outcome = normalize_response(200, True, json.dumps(sample_result_body))

    assert outcome.exchange_rate is None
    assert outcome.total_monthly_jpy is None
    assert 'totalMonthlyJPY' not in outcome.to_dict()
    assert outcome.total_monthly_usd == 9.41


def test_error_field_becomes_failure_message():
    """The service's error field is surfaced as the failure message."""
    outcome = normalize_response(400, False, json.dumps({'error': 'bad instance'}), 'Bad Request')

    assert isinstance(outcome, EstimateFailure)
    assert outcome.message == 'bad instance'
    assert outcome.kind == FailureKind.SERVICE
    assert outcome.status_code == 400


def test_error_inside_envelope_body_is_surfaced():
    """Errors wrapped in an envelope body are surfaced too."""
    raw = json.dumps({'statusCode': 400, 'body': json.dumps({'error': 'unsupported region'})})

    outcome = normalize_response(200, False, raw)

    assert isinstance(outcome, EstimateFailure)
    assert outcome.message == 'unsupported region'


def test_unparsable_body_with_transport_failure_reports_status():
    """Unparsable bodies fall back to a message with the status code."""
    outcome = normalize_response(502, False, '<html>Bad Gateway</html>', 'Bad Gateway')

    assert isinstance(outcome, EstimateFailure)
    assert '502' in outcome.message
    assert outcome.message == 'API error: 502 Bad Gateway'
    assert outcome.kind == FailureKind.TRANSPORT


def test_failure_message_without_reason_phrase():
    outcome = normalize_response(500, False, '')

    assert outcome.message == 'API error: 500'


def test_unparsable_body_with_transport_ok_is_empty_result():
    """Malformed bodies are absorbed, not raised."""
    outcome = normalize_response(200, True, 'not json')

    assert isinstance(outcome, EstimateResult)
    assert outcome.to_dict() == {}


@pytest.mark.parametrize("raw", ['[1, 2, 3]', '42', '"text"', 'null', None, b'\xff\xfe'])
def test_non_object_bodies_are_treated_as_empty(raw):
    outcome = normalize_response(200, True, raw)

    assert isinstance(outcome, EstimateResult)
    assert outcome.to_dict() == {}


def test_unparsable_envelope_body_is_empty():
    """A string body that is not JSON becomes an empty effective body."""
    raw = json.dumps({'statusCode': 200, 'body': 'oops'})

    outcome = normalize_response(200, True, raw)

    assert isinstance(outcome, EstimateResult)
    assert outcome.to_dict() == {}


def test_object_body_field_is_not_unwrapped():
    """Only string bodies are treated as envelopes."""
    parsed = {'body': {'totalMonthlyJPY': 1}, 'statusCode': 200}

    assert unwrap_envelope(parsed) is parsed


def test_bytes_body_is_parsed():
    outcome = normalize_response(200, True, b'{"totalMonthlyUSD": 12.5}')

    assert outcome.total_monthly_usd == 12.5


def test_empty_error_field_falls_back_to_status():
    outcome = normalize_response(503, False, json.dumps({'error': ''}), 'Service Unavailable')

    assert outcome.message == 'API error: 503 Service Unavailable'


@pytest.mark.parametrize("error", [0, False, [], {}])
def test_falsy_error_values_fall_back_to_status(error):
    """Falsy error values do not become messages like '0' or 'False'."""
    outcome = normalize_response(400, False, json.dumps({'error': error}), 'Bad Request')

    assert outcome.message == 'API error: 400 Bad Request'
    assert outcome.kind == FailureKind.TRANSPORT


def test_structured_error_is_serialized_as_json():
    """Non-string error values are rendered as JSON, not Python repr."""
    body = {'error': {'message': 'bad instance', 'code': 40}}

    outcome = normalize_response(400, False, json.dumps(body), 'Bad Request')

    assert outcome.kind == FailureKind.SERVICE
    assert json.loads(outcome.message) == {'message': 'bad instance', 'code': 40}
