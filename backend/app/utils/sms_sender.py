"""
SMS sending utility. Only a console backend ships; provider backends plug in
by implementing SmsBackend.
"""
import os
import logging
from abc import ABC, abstractmethod

from app.models.verification_code import CODE_TTL_MINUTES

logger = logging.getLogger(__name__)


class SmsBackend(ABC):

    @abstractmethod
    def send(self, phone, text):
        pass


class ConsoleSmsBackend(SmsBackend):
    """Logs messages instead of sending them (development/testing)."""

    def send(self, phone, text):
        logger.info("[SMS] To: %s | %s", phone, text)


def get_sms_backend(name=None):
    backend_name = (name or os.getenv('SMS_BACKEND', 'console')).lower()
    if backend_name == 'console':
        return ConsoleSmsBackend()
    raise ValueError(f"Unknown SMS_BACKEND: {backend_name}")


class SmsCodeSender:
    """Formats verification-code texts and hands them to a backend."""

    def __init__(self, backend: SmsBackend):
        self.backend = backend

    def __call__(self, type_, phone, code):
        text = f"【TriGuard】您的验证码为{code}，{CODE_TTL_MINUTES}分钟内有效，请勿泄露给他人。"
        self.backend.send(phone, text)
        logger.info("Verification code (%s) sent to %s", type_, phone)
