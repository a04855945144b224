"""Tests for the Lambda handlers."""
import json
from dataclasses import dataclass
from unittest.mock import Mock, patch

import pytest
from aws_lambda_powertools import Logger
from lunarium.handlers import config_handler, day_handler, wheel_handler


@dataclass
class FakeLambdaContext:
    """Minimal Lambda context accepted by the logger decorator."""
    function_name: str = "lunarium-test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:lunarium-test"
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"


@pytest.fixture
def context():
    return FakeLambdaContext()


@pytest.fixture
def mock_dynamo():
    """Mocked DynamoDB holding a 28 day cycle started on 2025-01-01."""
    with patch('lunarium.services.settings.get_dynamo') as mock_get_dynamo:
        dynamo = Mock()
        dynamo.query_items.return_value = [
            {
                "PK": "USER#42",
                "SK": "SETTINGS#cycleConfig",
                "data": json.dumps({"cycleStartDate": "2025-01-01", "cycleLength": 28}),
            },
        ]
        mock_get_dynamo.return_value = dynamo
        yield dynamo


def make_event(body):
    return {"body": json.dumps(body)}


def test_day_handler(mock_dynamo, context):
    """Day details are returned for the requested date."""
    response = day_handler(make_event({
        "user_id": "42",
        "day": "2025-01-15",
        "activities": [
            {"id": "evt-1", "summary": "Yoga", "start": {"date": "2025-01-15"}},
        ],
    }), context)

    assert response["statusCode"] == 200
    body = json.loads(response["body"])
    assert body["cycle_day"] == 14
    assert body["phase"]["name"] == "Ovulation"
    assert body["phase"]["color"] == {"kind": "flat", "hex": "#f9f505"}
    assert [a["title"] for a in body["activities"]] == ["Yoga"]


def test_day_handler_defaults_to_today(mock_dynamo, context):
    """Without a day, the request's today is described."""
    response = day_handler(make_event({"user_id": "42", "today": "2025-01-02"}), context)

    body = json.loads(response["body"])
    assert body["day"] == "2025-01-02"
    assert body["cycle_day"] == 1


def test_day_handler_bad_request(mock_dynamo, context):
    """Malformed bodies are client errors."""
    response = day_handler({"body": "{oops"}, context)
    assert response["statusCode"] == 400

    response = day_handler(make_event({"day": "2025-01-02"}), context)
    assert response["statusCode"] == 400


def test_day_handler_store_failure(mock_dynamo, context):
    """Storage failures are server errors."""
    mock_dynamo.query_items.side_effect = RuntimeError("unavailable")

    response = day_handler(make_event({"user_id": "42"}), context)

    assert response["statusCode"] == 500


def test_wheel_handler(mock_dynamo, context):
    """The wheel is anchored on today with the selected day's phase."""
    response = wheel_handler(make_event({
        "user_id": "42",
        "today": "2025-01-10",
        "selected_day": 26,
    }), context)

    assert response["statusCode"] == 200
    body = json.loads(response["body"])
    assert body["current_day"] == 9
    assert body["display_day"] == 26
    assert body["display_date"] == "2025-01-27"
    assert body["phase"]["name"] == "SPM"
    assert len(body["layout"]["segments"]) == 28
    assert body["paths"]["1"].startswith("M ")
    assert body["layout"]["rotation_degrees"] == pytest.approx(-8.5 * 360 / 28)


def test_wheel_handler_rejects_day_off_the_wheel(mock_dynamo, context):
    """Selecting a day past the cycle length is a client error."""
    response = wheel_handler(make_event({
        "user_id": "42",
        "today": "2025-01-10",
        "selected_day": 40,
    }), context)

    assert response["statusCode"] == 400


def test_config_handler(mock_dynamo, context):
    """Saving derives history and reports the average."""
    response = config_handler(make_event({
        "user_id": "42",
        "cycle_start_date": "2025-04-01",
        "cycle_length": 30,
        "history": [{"startDate": "2025-03-01"}, {"startDate": "2025-02-01"}],
    }), context)

    assert response["statusCode"] == 200
    body = json.loads(response["body"])
    assert body["config"] == {"cycleStartDate": "2025-04-01", "cycleLength": 30}
    assert body["history"] == [
        {"startDate": "2025-02-01", "length": 28},
        {"startDate": "2025-03-01", "length": 31},
    ]
    assert body["average_length"] == 30
    assert body["effective_length"] == 30
    assert body["average_with_current"] == 30
    mock_dynamo.put_items_atomically.assert_called_once()


def test_config_handler_rejects_out_of_range_length(mock_dynamo, context):
    """Cycle lengths outside 21-35 days are refused."""
    response = config_handler(make_event({
        "user_id": "42",
        "cycle_start_date": "2025-04-01",
        "cycle_length": 45,
    }), context)

    assert response["statusCode"] == 400
    assert "outside the supported range" in json.loads(response["body"])["error"]
    mock_dynamo.put_items_atomically.assert_not_called()


def test_config_handler_rejects_oversized_history(mock_dynamo, context):
    """More than 12 past cycles are refused before anything is written."""
    response = config_handler(make_event({
        "user_id": "42",
        "cycle_start_date": "2025-04-01",
        "cycle_length": 28,
        "history": [{"startDate": f"2024-{month:02d}-01"} for month in range(1, 13)]
        + [{"startDate": "2025-01-01"}],
    }), context)

    assert response["statusCode"] == 400
    mock_dynamo.put_items_atomically.assert_not_called()


def test_config_handler_reads_settings(mock_dynamo, context):
    """GET returns the stored config and history."""
    stored = {
        "SETTINGS#cycleConfig": {"data": json.dumps({"cycleStartDate": "2025-04-01", "cycleLength": 30})},
        "SETTINGS#cycleHistory": {"data": json.dumps([{"startDate": "2025-03-01", "length": 31}])},
    }
    mock_dynamo.get_item.side_effect = lambda key: stored.get(key["SK"])

    response = config_handler({
        "httpMethod": "GET",
        "queryStringParameters": {"user_id": "42", "today": "2025-04-10"},
    }, context)

    assert response["statusCode"] == 200
    body = json.loads(response["body"])
    assert body["config"] == {"cycleStartDate": "2025-04-01", "cycleLength": 30}
    assert body["history"] == [{"startDate": "2025-03-01", "length": 31}]
    assert body["average_length"] == 31
    assert body["effective_length"] == 31


def test_config_handler_reads_defaults(mock_dynamo, context):
    """GET for a new user returns a 28 day cycle starting today."""
    mock_dynamo.get_item.return_value = None

    response = config_handler({
        "httpMethod": "GET",
        "queryStringParameters": {"user_id": "7", "today": "2025-04-10"},
    }, context)

    body = json.loads(response["body"])
    assert body["config"] == {"cycleStartDate": "2025-04-10", "cycleLength": 28}
    assert body["history"] == []


def test_config_handler_requires_user_id(mock_dynamo, context):
    """GET and DELETE need a user_id query parameter."""
    for method in ("GET", "DELETE"):
        response = config_handler({"httpMethod": method, "queryStringParameters": None}, context)
        assert response["statusCode"] == 400


def test_config_handler_clears_settings(mock_dynamo, context):
    """DELETE removes both settings documents."""
    response = config_handler({
        "httpMethod": "DELETE",
        "queryStringParameters": {"user_id": "42"},
    }, context)

    assert response["statusCode"] == 204
    keys = [call.args[0]["SK"] for call in mock_dynamo.delete_item.call_args_list]
    assert keys == ["SETTINGS#cycleConfig", "SETTINGS#cycleHistory"]


def test_server_error_logs_traceback_on_one_line(mock_dynamo, context):
    """Unexpected failures log the traceback in a single-line exception key."""
    mock_dynamo.query_items.side_effect = RuntimeError("unavailable")

    with patch.object(Logger, "exception") as mock_exception:
        response = day_handler(make_event({"user_id": "42"}), context)

    assert response["statusCode"] == 500
    mock_exception.assert_called_once()
    kwargs = mock_exception.call_args.kwargs
    assert kwargs["exc_info"] is False
    trace = kwargs["extra"]["exception"]
    assert "\n" not in trace
    assert " | " in trace
    assert "RuntimeError: unavailable" in trace
