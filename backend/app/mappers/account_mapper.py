from app.models.account import Account
from .base import BaseMapper


class AccountMapper(BaseMapper):
    model = Account

    def find_by_username_or_email(self, text):
        return (self.session.query(Account)
                .filter((Account.username == text) | (Account.email == text))
                .first())
