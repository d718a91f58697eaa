from datetime import timedelta
import uuid

from accounts.session import SessionToken, seal_session, unseal_session


def test_seal_and_unseal():
    user_id = uuid.uuid4()
    token = seal_session(user_id)

    assert isinstance(token, str)
    assert unseal_session(token) == str(user_id)


def test_tampered_token_rejected():
    token = seal_session(uuid.uuid4())
    head, payload, signature = token.split(".")
    tampered = ".".join([head, payload, signature[::-1]])

    assert unseal_session(tampered) is None


def test_garbage_rejected():
    assert unseal_session("not-a-token") is None
    assert unseal_session("") is None
    assert unseal_session(None) is None


def test_expired_token_rejected(settings):
    settings.SESSION_TOKEN_MAX_AGE = timedelta(seconds=-1)
    token = seal_session(uuid.uuid4())

    assert unseal_session(token) is None


def test_token_type_is_session():
    token = SessionToken(seal_session(uuid.uuid4()))
    assert token["token_type"] == "session"
