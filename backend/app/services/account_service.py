"""
Account service: verification codes, registration, password reset and login.
"""
import logging

from app.models.account import Account, ROLE_DEFAULT
from app.models.verification_code import VerificationCode
from app.utils.result import Result

logger = logging.getLogger(__name__)

MSG_TOO_FREQUENT = '请求频繁，请稍后再试'
MSG_SEND_FAILED = '验证码发送失败，请稍后再试'
MSG_EMAIL_TAKEN = '该邮件地址已被注册'
MSG_EMAIL_UNKNOWN = '邮箱未注册'
MSG_PHONE_TAKEN = '该手机号已被注册'
MSG_PHONE_UNKNOWN = '手机号未注册'
MSG_NO_CODE = '请先获取验证码'
MSG_WRONG_CODE = '验证码错误，请重新输入'
MSG_USERNAME_TAKEN = '该用户名已被他人使用，请重新更换'
MSG_REGISTER_FAILED = '内部错误，注册失败'
MSG_UPDATE_FAILED = '更新失败，请联系管理员'
MSG_BAD_CREDENTIALS = '用户名或密码错误'


class AccountService:
    """
    All public methods return a Result; failures carry the message shown to
    the user verbatim.
    """

    def __init__(self, account_mapper, email_limiter, phone_limiter,
                 email_sender, sms_sender, token_issuer):
        self.account_mapper = account_mapper
        self.email_limiter = email_limiter
        self.phone_limiter = phone_limiter
        self.email_sender = email_sender
        self.sms_sender = sms_sender
        self.token_issuer = token_issuer

    # ---------- Verification codes ----------

    def send_email_verification_code(self, type_, email, ip) -> Result:
        registered = self.account_mapper.exists(email=email)
        if type_ == 'register' and registered:
            return Result.failure(MSG_EMAIL_TAKEN)
        if type_ == 'reset' and not registered:
            return Result.failure(MSG_EMAIL_UNKNOWN)
        return self._deliver_code('email', email, type_, ip,
                                  self.email_limiter, self.email_sender)

    def send_phone_verification_code(self, type_, phone, ip) -> Result:
        registered = self.account_mapper.exists(phone=phone)
        if type_ == 'register' and registered:
            return Result.failure(MSG_PHONE_TAKEN)
        if type_ == 'reset' and not registered:
            return Result.failure(MSG_PHONE_UNKNOWN)
        return self._deliver_code('phone', phone, type_, ip,
                                  self.phone_limiter, self.sms_sender)

    @staticmethod
    def _deliver_code(channel, target, type_, ip, limiter, sender) -> Result:
        """Issue and send a code. The caller's quota is only spent on a successful send."""
        if limiter.is_limited(ip):
            return Result.failure(MSG_TOO_FREQUENT)

        verification = VerificationCode.issue(channel, target, type_)
        try:
            sender(type_, target, verification.code)
        except OSError:
            logger.error("Failed to deliver %s code to %s", channel, target, exc_info=True)
            verification.discard()
            return Result.failure(MSG_SEND_FAILED)

        limiter.record(ip)
        return Result.success()

    @staticmethod
    def _check_code(channel, target, type_, code) -> Result:
        verification = VerificationCode.find_active(channel, target, type_)
        if verification is None:
            return Result.failure(MSG_NO_CODE)
        if verification.code != str(code):
            return Result.failure(MSG_WRONG_CODE)
        return Result.success()

    # ---------- Registration ----------

    def register_email_account(self, form: dict) -> Result:
        email = form['email'].strip()
        checked = self._check_code('email', email, 'register', form['code'])
        if not checked:
            return checked

        if self.account_mapper.exists(email=email):
            return Result.failure(MSG_EMAIL_TAKEN)
        if self.account_mapper.exists(username=form['username']):
            return Result.failure(MSG_USERNAME_TAKEN)

        account = Account(username=form['username'], email=email, role=ROLE_DEFAULT)
        account.set_password(form['password'])
        if not self.account_mapper.insert(account):
            return Result.failure(MSG_REGISTER_FAILED)

        VerificationCode.consume('email', email, 'register')
        logger.info("Registered account id=%s", account.id)
        return Result.success()

    # ---------- Password reset ----------

    def email_confirm_reset(self, form: dict) -> Result:
        return self._check_code('email', form['email'].strip(), 'reset', form['code'])

    def reset_email_account_password(self, form: dict) -> Result:
        confirmed = self.email_confirm_reset(form)
        if not confirmed:
            return confirmed

        email = form['email'].strip()
        account = self.account_mapper.select_one(email=email)
        if account is None:
            return Result.failure(MSG_EMAIL_UNKNOWN)

        account.set_password(form['password'])
        if not self.account_mapper.update_by_id(account.id, {'password': account.password}):
            return Result.failure(MSG_UPDATE_FAILED)

        VerificationCode.consume('email', email, 'reset')
        logger.info("Password reset for account id=%s", account.id)
        return Result.success()

    # ---------- Login ----------

    def login(self, username, password) -> Result:
        account = self.account_mapper.find_by_username_or_email(username)
        if account is None or not account.check_password(password):
            return Result.failure(MSG_BAD_CREDENTIALS)

        token = self.token_issuer(account.id, account.username, account.role)
        return Result.success({
            'id': account.id,
            'username': account.username,
            'role': account.role,
            'token': token['token'],
            'expire': token['expire'],
        })
