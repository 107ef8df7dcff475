"""
Uniform response envelope: {code, msg, data}.
"""
from flask import jsonify

from .result import Result


class RestBean:
    """Wraps every API response. The HTTP status mirrors `code`."""

    def __init__(self, code: int, data=None, msg: str = None):
        self.code = code
        self.data = data
        self.msg = msg

    @classmethod
    def success(cls, data=None):
        return cls(200, data=data)

    @classmethod
    def failure(cls, code: int, msg: str):
        return cls(code, msg=msg)

    @classmethod
    def from_result(cls, result: Result):
        """Map a service Result to an envelope; failures become code 400."""
        if result.ok:
            return cls.success(result.data)
        return cls.failure(400, result.message)

    def to_dict(self):
        return {'code': self.code, 'msg': self.msg, 'data': self.data}

    def as_response(self):
        return jsonify(self.to_dict()), self.code


def message_handle(action):
    """Run one service call and turn its Result into a response."""
    return RestBean.from_result(action()).as_response()
