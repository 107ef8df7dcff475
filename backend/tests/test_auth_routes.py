"""
Controller tests for /api/auth with the AccountService mocked out.

Checks that invalid input never reaches the service and that service results
are mapped onto the envelope unchanged.
"""
import pytest

from app.utils.result import Result


class TestEmailCode:

    def test_success_envelope(self, client, mock_account_service):
        response = client.get('/api/auth/email-code?email=a@b.com&type=register')
        assert response.status_code == 200
        assert response.get_json() == {'code': 200, 'msg': None, 'data': None}
        mock_account_service.send_email_verification_code.assert_called_once_with(
            'register', 'a@b.com', '127.0.0.1')

    def test_service_message_is_surfaced_verbatim(self, client, mock_account_service):
        mock_account_service.send_email_verification_code.return_value = \
            Result.failure('邮箱未注册')
        response = client.get('/api/auth/email-code?email=a@b.com&type=reset')
        assert response.status_code == 400
        assert response.get_json() == {'code': 400, 'msg': '邮箱未注册', 'data': None}

    @pytest.mark.parametrize('query', [
        'email=not-an-email&type=register',
        'email=&type=register',
        'type=register',
        'email=a@b.com&type=login',
        'email=a@b.com',
    ])
    def test_invalid_input_rejected_before_service(self, client, mock_account_service, query):
        response = client.get(f'/api/auth/email-code?{query}')
        body = response.get_json()
        assert response.status_code == 400
        assert body['code'] == 400
        assert body['msg']
        assert body['data'] is None
        mock_account_service.send_email_verification_code.assert_not_called()


class TestPhoneCode:

    def test_success(self, client, mock_account_service):
        response = client.get('/api/auth/phone-code?phone=13912345678&type=register')
        assert response.get_json() == {'code': 200, 'msg': None, 'data': None}
        mock_account_service.send_phone_verification_code.assert_called_once_with(
            'register', '13912345678', '127.0.0.1')

    @pytest.mark.parametrize('phone', ['12912345678', '1391234567', '+8613912345678', '',
                                       '13912345678\n'])
    def test_bad_phone_rejected_before_service(self, client, mock_account_service, phone):
        response = client.get('/api/auth/phone-code',
                              query_string={'phone': phone, 'type': 'register'})
        assert response.status_code == 400
        mock_account_service.send_phone_verification_code.assert_not_called()

    def test_bad_type_rejected_before_service(self, client, mock_account_service):
        response = client.get('/api/auth/phone-code?phone=13912345678&type=other')
        assert response.get_json()['msg'] == '验证码类型不正确'
        mock_account_service.send_phone_verification_code.assert_not_called()


class TestForms:

    REGISTER = {'email': 'a@b.com', 'code': '123456', 'username': 'alice', 'password': 'secret123'}

    def test_register_success(self, client, mock_account_service):
        response = client.post('/api/auth/email-register', json=self.REGISTER)
        assert response.get_json() == {'code': 200, 'msg': None, 'data': None}
        mock_account_service.register_email_account.assert_called_once_with(self.REGISTER)

    def test_register_failure(self, client, mock_account_service):
        mock_account_service.register_email_account.return_value = \
            Result.failure('验证码错误，请重新输入')
        response = client.post('/api/auth/email-register', json=self.REGISTER)
        assert response.get_json() == {'code': 400, 'msg': '验证码错误，请重新输入', 'data': None}

    def test_register_invalid_form(self, client, mock_account_service):
        response = client.post('/api/auth/email-register', json=dict(self.REGISTER, password='123'))
        assert response.get_json()['msg'] == '密码长度必须在6-20位之间'
        mock_account_service.register_email_account.assert_not_called()

    def test_register_requires_body(self, client, mock_account_service):
        response = client.post('/api/auth/email-register', json=[1, 2])
        assert response.get_json() == {'code': 400, 'msg': '请求体不能为空', 'data': None}
        mock_account_service.register_email_account.assert_not_called()

    def test_post_requires_json_content_type(self, client, mock_account_service):
        response = client.post('/api/auth/email-register', data='email=a@b.com')
        assert response.status_code == 415
        assert response.get_json()['code'] == 415
        mock_account_service.register_email_account.assert_not_called()

    def test_reset_confirm(self, client, mock_account_service):
        response = client.post('/api/auth/reset-confirm', json={'email': 'a@b.com', 'code': '123456'})
        assert response.get_json() == {'code': 200, 'msg': None, 'data': None}
        mock_account_service.email_confirm_reset.assert_called_once()

    def test_reset_confirm_failure(self, client, mock_account_service):
        mock_account_service.email_confirm_reset.return_value = Result.failure('请先获取验证码')
        response = client.post('/api/auth/reset-confirm', json={'email': 'a@b.com', 'code': '123456'})
        assert response.get_json() == {'code': 400, 'msg': '请先获取验证码', 'data': None}

    def test_reset_password(self, client, mock_account_service):
        response = client.post('/api/auth/reset-password',
                               json={'email': 'a@b.com', 'code': '123456', 'password': 'newpass1'})
        assert response.get_json()['code'] == 200
        mock_account_service.reset_email_account_password.assert_called_once()

    def test_reset_password_invalid(self, client, mock_account_service):
        response = client.post('/api/auth/reset-password',
                               json={'email': 'bad', 'code': '123456', 'password': 'newpass1'})
        assert response.status_code == 400
        mock_account_service.reset_email_account_password.assert_not_called()

    def test_login_returns_token_payload(self, client, mock_account_service):
        mock_account_service.login.return_value = Result.success(
            {'id': 1, 'username': 'alice', 'role': 'user', 'token': 't', 'expire': 'e'})
        response = client.post('/api/auth/login', json={'username': 'alice', 'password': 'x'})
        body = response.get_json()
        assert body['code'] == 200
        assert body['data']['token'] == 't'
        mock_account_service.login.assert_called_once_with('alice', 'x')


class TestFrameworkErrors:

    def test_unknown_route(self, client):
        response = client.get('/api/auth/nope')
        assert response.status_code == 404
        assert response.get_json() == {'code': 404, 'msg': '请求的资源不存在', 'data': None}

    def test_wrong_method(self, client):
        response = client.get('/api/auth/email-register')
        assert response.status_code == 405
        assert response.get_json()['code'] == 405

    def test_unexpected_error_is_500_envelope(self, client, mock_account_service):
        mock_account_service.send_email_verification_code.side_effect = RuntimeError('boom')
        response = client.get('/api/auth/email-code?email=a@b.com&type=register')
        assert response.status_code == 500
        assert response.get_json() == {'code': 500, 'msg': '内部错误', 'data': None}
