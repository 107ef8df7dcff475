"""End-to-end account flows through the HTTP API with the real services."""
from datetime import datetime
from unittest.mock import MagicMock

from app.models import Account, RevokedToken


def _json(response):
    return response.get_json()


class TestRegistrationFlow:

    def test_register_login_and_logout(self, client, app, latest_code):
        assert _json(client.get('/api/auth/email-code?email=bob@qq.com&type=register'))['code'] == 200
        code = latest_code('bob@qq.com', 'register')

        register = client.post('/api/auth/email-register', json={
            'email': 'bob@qq.com', 'code': code, 'username': 'bob', 'password': 'secret123'})
        assert _json(register) == {'code': 200, 'msg': None, 'data': None}
        with app.app_context():
            assert Account.query.filter_by(username='bob').count() == 1

        login = _json(client.post('/api/auth/login', json={'username': 'bob', 'password': 'secret123'}))
        assert login['code'] == 200
        assert login['data']['username'] == 'bob'
        headers = {'Authorization': f"Bearer {login['data']['token']}"}

        assert _json(client.get('/api/blood-pressure/get?date=2024-05-01', headers=headers))['code'] == 200

        assert _json(client.post('/api/auth/logout', json={}, headers=headers))['code'] == 200
        revoked = client.get('/api/blood-pressure/get?date=2024-05-01', headers=headers)
        assert revoked.status_code == 401
        assert _json(revoked)['msg'] == '登录已失效，请重新登录'

    def test_second_code_within_a_minute_is_throttled(self, client):
        assert _json(client.get('/api/auth/email-code?email=bob@qq.com&type=register'))['code'] == 200
        again = _json(client.get('/api/auth/email-code?email=bob@qq.com&type=register'))
        assert again == {'code': 400, 'msg': '请求频繁，请稍后再试', 'data': None}

    def test_throttle_is_per_ip(self, client):
        assert _json(client.get('/api/auth/email-code?email=bob@qq.com&type=register'))['code'] == 200
        other_ip = client.get('/api/auth/email-code?email=bob@qq.com&type=register',
                              environ_base={'REMOTE_ADDR': '10.0.0.9'})
        assert _json(other_ip)['code'] == 200

    def test_failed_delivery_does_not_spend_quota(self, client, app, latest_code):
        service = app.extensions['account_service']
        working_sender = service.email_sender
        service.email_sender = MagicMock(side_effect=OSError('smtp down'))
        failed = _json(client.get('/api/auth/email-code?email=bob@qq.com&type=register'))
        assert failed == {'code': 400, 'msg': '验证码发送失败，请稍后再试', 'data': None}
        assert latest_code('bob@qq.com', 'register') is None

        service.email_sender = working_sender
        assert _json(client.get('/api/auth/email-code?email=bob@qq.com&type=register'))['code'] == 200
        assert latest_code('bob@qq.com', 'register') is not None

    def test_reset_unknown_email(self, client):
        assert _json(client.get('/api/auth/email-code?email=a@b.com&type=reset')) == \
            {'code': 400, 'msg': '邮箱未注册', 'data': None}


class TestPasswordResetFlow:

    def test_reset_password(self, client, account, latest_code):
        assert _json(client.get(f"/api/auth/email-code?email={account['email']}&type=reset"))['code'] == 200
        code = latest_code(account['email'], 'reset')

        confirm = client.post('/api/auth/reset-confirm', json={'email': account['email'], 'code': code})
        assert _json(confirm)['code'] == 200

        reset = client.post('/api/auth/reset-password', json={
            'email': account['email'], 'code': code, 'password': 'brandnew1'})
        assert _json(reset) == {'code': 200, 'msg': None, 'data': None}

        old = client.post('/api/auth/login', json={'username': 'alice', 'password': 'secret123'})
        assert _json(old) == {'code': 400, 'msg': '用户名或密码错误', 'data': None}
        new = client.post('/api/auth/login', json={'username': 'alice', 'password': 'brandnew1'})
        assert _json(new)['code'] == 200

    def test_phone_code(self, client, account, latest_code):
        response = client.get(f"/api/auth/phone-code?phone={account['phone']}&type=reset")
        assert _json(response)['code'] == 200
        assert latest_code(account['phone'], 'reset', channel='phone') is not None


class TestLoginThrottle:

    def test_sixth_attempt_in_a_minute_is_429(self, client):
        for _ in range(5):
            assert client.post('/api/auth/login',
                               json={'username': 'x', 'password': 'y'}).status_code == 400
        response = client.post('/api/auth/login', json={'username': 'x', 'password': 'y'})
        assert response.status_code == 429
        assert _json(response)['code'] == 429


class TestLogout:

    def test_revocation_expires_with_token(self, client, app, account):
        login = _json(client.post('/api/auth/login', json={'username': 'alice', 'password': 'secret123'}))
        headers = {'Authorization': f"Bearer {login['data']['token']}"}
        assert _json(client.post('/api/auth/logout', json={}, headers=headers))['code'] == 200

        expire = datetime.fromisoformat(login['data']['expire']).replace(microsecond=0)
        with app.app_context():
            revoked = RevokedToken.query.filter_by(account_id=account['id']).one()
            assert revoked.expires_at == expire
