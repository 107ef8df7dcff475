"""
Input validation for auth and blood pressure request payloads.

Each validator returns a list of error strings (empty = valid). Routes reject
the request with the first error before any service is called.
"""
import re
from datetime import datetime
from email_validator import validate_email, EmailNotValidError

PHONE_PATTERN = re.compile(r'1[3-9]\d{9}', re.ASCII)
CODE_PATTERN = re.compile(r'\d{6}', re.ASCII)
USERNAME_PATTERN = re.compile(r'[a-zA-Z0-9一-龥]+')
TIME_PATTERN = re.compile(r'([01]\d|2[0-3]):[0-5]\d', re.ASCII)
DATE_PATTERN = re.compile(r'\d{4}-\d{2}-\d{2}', re.ASCII)
CODE_TYPES = ('register', 'reset')


def _check_email(email, errors):
    if not isinstance(email, str) or not email.strip():
        errors.append('邮箱不能为空')
        return
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        errors.append('邮箱格式不正确')


def _check_code(code, errors):
    if code is None or code == '':
        errors.append('验证码不能为空')
    elif not CODE_PATTERN.fullmatch(str(code)):
        errors.append('验证码格式不正确')


def _check_password(password, errors):
    if not isinstance(password, str) or not password:
        errors.append('密码不能为空')
    elif len(password) < 6 or len(password) > 20:
        errors.append('密码长度必须在6-20位之间')


def _check_type(type_, errors):
    if type_ not in CODE_TYPES:
        errors.append('验证码类型不正确')


def validate_email_code_request(args) -> list:
    """Validate ?email=&type= for requesting an email code."""
    errors = []
    _check_email(args.get('email'), errors)
    _check_type(args.get('type'), errors)
    return errors


def validate_phone_code_request(args) -> list:
    """Validate ?phone=&type= for requesting an SMS code."""
    errors = []
    phone = args.get('phone')
    if not phone:
        errors.append('手机号不能为空')
    elif not PHONE_PATTERN.fullmatch(str(phone)):
        errors.append('手机号格式不正确')
    _check_type(args.get('type'), errors)
    return errors


def validate_email_register(data: dict) -> list:
    errors = []
    _check_email(data.get('email'), errors)
    _check_code(data.get('code'), errors)

    username = data.get('username')
    if not isinstance(username, str) or not username:
        errors.append('用户名不能为空')
    else:
        if len(username) > 10:
            errors.append('用户名长度不能超过10个字符')
        if not USERNAME_PATTERN.fullmatch(username):
            errors.append('用户名只能包含字母、数字和中文')

    _check_password(data.get('password'), errors)
    return errors


def validate_confirm_reset(data: dict) -> list:
    errors = []
    _check_email(data.get('email'), errors)
    _check_code(data.get('code'), errors)
    return errors


def validate_email_reset(data: dict) -> list:
    errors = validate_confirm_reset(data)
    _check_password(data.get('password'), errors)
    return errors


def validate_login(data: dict) -> list:
    errors = []
    if not data.get('username'):
        errors.append('用户名不能为空')
    if not data.get('password'):
        errors.append('密码不能为空')
    return errors


def _check_int_range(data, key, label, low, high, errors, required=True):
    value = data.get(key)
    if value is None:
        if required:
            errors.append(f'{label}不能为空')
        return
    if isinstance(value, bool):
        errors.append(f'{label}必须为整数')
        return
    try:
        v = int(value)
    except (ValueError, TypeError):
        errors.append(f'{label}必须为整数')
        return
    if v < low or v > high:
        errors.append(f'{label}必须在{low}-{high}之间')


def validate_date(value) -> bool:
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        return False
    try:
        datetime.strptime(value, '%Y-%m-%d')
    except ValueError:
        return False
    return True


def validate_blood_pressure_create(data: dict) -> list:
    """Validate blood pressure values and the date/time they were measured."""
    errors = []
    _check_int_range(data, 'systolic', '收缩压', 40, 300, errors)
    _check_int_range(data, 'diastolic', '舒张压', 20, 200, errors)
    _check_int_range(data, 'heart_rate', '心率', 20, 250, errors, required=False)

    if not data.get('date'):
        errors.append('日期不能为空')
    elif not validate_date(data['date']):
        errors.append('日期格式必须为YYYY-MM-DD')

    time = data.get('time')
    if time is not None and time != '':
        if not isinstance(time, str) or not TIME_PATTERN.fullmatch(time):
            errors.append('时间格式必须为HH:MM')
    return errors


def validate_blood_pressure_update(data: dict) -> list:
    errors = []
    _check_int_range(data, 'id', '记录ID', 1, 2 ** 31 - 1, errors)
    errors.extend(validate_blood_pressure_create(data))
    return errors
