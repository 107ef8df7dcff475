"""Tests for the response envelope and the service Result type."""
import pytest

from app.utils.rest_bean import RestBean, message_handle
from app.utils.result import Result


class TestResult:

    def test_success_carries_data(self):
        result = Result.success({'a': 1})
        assert result.ok
        assert result.data == {'a': 1}
        assert result.message is None

    def test_failure_carries_message(self):
        result = Result.failure('邮箱未注册')
        assert not result
        assert result.message == '邮箱未注册'
        assert result.data is None

    def test_failure_requires_message(self):
        with pytest.raises(ValueError):
            Result.failure('')

    def test_equality(self):
        assert Result.success() == Result.success()
        assert Result.failure('x') != Result.failure('y')


class TestRestBean:

    def test_success_shape(self):
        assert RestBean.success().to_dict() == {'code': 200, 'msg': None, 'data': None}

    def test_success_with_payload(self):
        assert RestBean.success([1, 2]).to_dict() == {'code': 200, 'msg': None, 'data': [1, 2]}

    def test_failure_shape(self):
        bean = RestBean.failure(400, '验证码错误，请重新输入')
        assert bean.to_dict() == {'code': 400, 'msg': '验证码错误，请重新输入', 'data': None}

    def test_from_result_success(self):
        assert RestBean.from_result(Result.success('x')).to_dict() == \
            {'code': 200, 'msg': None, 'data': 'x'}

    def test_from_result_failure_is_400_with_exact_message(self):
        bean = RestBean.from_result(Result.failure('该用户名已被他人使用，请重新更换'))
        assert bean.code == 400
        assert bean.msg == '该用户名已被他人使用，请重新更换'
        assert bean.data is None

    def test_as_response_mirrors_status(self, app):
        with app.test_request_context():
            response, status = RestBean.failure(401, '请先登录').as_response()
            assert status == 401
            assert response.get_json() == {'code': 401, 'msg': '请先登录', 'data': None}

    def test_message_handle_runs_action_once(self, app):
        calls = []

        def action():
            calls.append(1)
            return Result.failure('请求频繁，请稍后再试')

        with app.test_request_context():
            response, status = message_handle(action)
        assert calls == [1]
        assert status == 400
        assert response.get_json()['msg'] == '请求频繁，请稍后再试'
