import json

import pytest
from pydantic import BaseModel

from jobfinder.errors import MalformedUpstreamResponse
from jobfinder.utils.parser import decode_json_payload, decode_lambda_body, validate_upstream


class Payload(BaseModel):
    cv_text: str


def test_decode_lambda_body_object():
    assert decode_lambda_body({"body": {"cv_text": "x"}}, "svc") == {"cv_text": "x"}


def test_decode_lambda_body_string():
    envelope = {"statusCode": 200, "body": json.dumps({"cv_text": "x"})}
    assert decode_lambda_body(envelope, "svc") == {"cv_text": "x"}


def test_decode_lambda_body_without_envelope():
    assert decode_lambda_body({"cv_text": "x"}, "svc") == {"cv_text": "x"}
    assert decode_lambda_body(json.dumps({"cv_text": "x"}), "svc") == {"cv_text": "x"}


def test_decode_lambda_body_rejects_non_objects():
    with pytest.raises(MalformedUpstreamResponse):
        decode_lambda_body({"body": "not json"}, "svc")
    with pytest.raises(MalformedUpstreamResponse):
        decode_lambda_body({"body": [1, 2]}, "svc")


def test_decode_json_payload_passes_objects_through():
    data = {"score": 1}
    assert decode_json_payload(data, "svc") is data


def test_validate_upstream():
    assert validate_upstream(Payload, {"cv_text": "x"}, "svc").cv_text == "x"

    with pytest.raises(MalformedUpstreamResponse) as exc_info:
        validate_upstream(Payload, {"text": "x"}, "Text extraction")
    assert exc_info.value.service == "Text extraction"
    assert "cv_text" in exc_info.value.message


def test_decode_json_payload_decodes_strings():
    assert decode_json_payload('{"score": 1}', "svc") == {"score": 1}
    assert decode_json_payload("[1, 2]", "svc") == [1, 2]


def test_decode_lambda_body_rejects_text_around_json():
    envelope = {"body": 'Task timed out after 3.00 seconds {"cv_text": "x"}'}
    with pytest.raises(MalformedUpstreamResponse) as exc_info:
        decode_lambda_body(envelope, "Text extraction")
    assert exc_info.value.service == "Text extraction"


def test_decode_lambda_body_rejects_fenced_json():
    with pytest.raises(MalformedUpstreamResponse):
        decode_lambda_body({"body": 'Result:\n```json\n{"cv_text": "x"}\n```'}, "svc")
