"""
HTTP controllers. Each route validates its input, makes one service call and
returns a RestBean envelope.
"""
from flask import request

from app.utils.rest_bean import RestBean


def json_body():
    """The request's JSON object, or None when absent or not an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def invalid(errors):
    """Reject a request that failed validation, reporting the first problem."""
    return RestBean.failure(400, errors[0]).as_response()


def missing_body():
    return RestBean.failure(400, '请求体不能为空').as_response()
