"""The signed `user` cookie. No HttpOnly flag, so page script can read it."""
from itsdangerous import BadSignature, Signer

COOKIE_NAME = "user"
_SALT = "tweeter.user-cookie"


def _signer(secret_key):
    return Signer(secret_key, salt=_SALT)


def sign_username(secret_key, username: str) -> str:
    return _signer(secret_key).sign(username).decode()


def read_username(secret_key, value):
    """Return the username carried by a cookie value, or None if it is missing or forged."""
    if not value:
        return None
    try:
        return _signer(secret_key).unsign(value).decode()
    except BadSignature:
        return None


def set_user_cookie(response, secret_key, username: str):
    response.set_cookie(COOKIE_NAME, sign_username(secret_key, username), path="/", httponly=False)
    return response


def clear_user_cookie(response):
    response.delete_cookie(COOKIE_NAME, path="/")
    return response
