"""
Explicit service result: success with optional data, or failure with a message.
"""


class Result:
    """Outcome of a service call. Use the `success` / `failure` constructors."""

    __slots__ = ('ok', 'message', 'data')

    def __init__(self, ok: bool, message: str = None, data=None):
        self.ok = ok
        self.message = message
        self.data = data

    @classmethod
    def success(cls, data=None):
        return cls(True, data=data)

    @classmethod
    def failure(cls, message: str):
        if not message:
            raise ValueError('A failed Result needs a message')
        return cls(False, message=message)

    def __bool__(self):
        return self.ok

    def __eq__(self, other):
        if not isinstance(other, Result):
            return NotImplemented
        return (self.ok, self.message, self.data) == (other.ok, other.message, other.data)

    def __repr__(self):
        if self.ok:
            return f'<Result ok data={self.data!r}>'
        return f'<Result failure {self.message!r}>'
