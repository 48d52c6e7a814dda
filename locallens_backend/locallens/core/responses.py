# locallens/core/responses.py
from flask import jsonify
from marshmallow import ValidationError

from locallens.core.exceptions import LocalLensError


def error_response(err: LocalLensError):
    """도메인 예외를 {error_code, msg} JSON 응답으로 변환합니다."""
    return jsonify(err.to_dict()), err.status_code


def validation_error_response(err: ValidationError):
    response = {"error_code": "VALIDATION_ERROR", "msg": "Validation failed", "details": err.messages}
    return jsonify(response), 400
