import pytest
from fastapi.security import HTTPAuthorizationCredentials

from nonprofit_api.app.core import security
from nonprofit_api.app.core.errors import AuthorizationError
from nonprofit_api.app.core.security import (
    CredentialConfig,
    CredentialService,
    IdentityStatus,
    require_roles,
    resolve_identity,
)

DAY = 24 * 60 * 60
HOUR = 60 * 60
T0 = 1_700_000_000


@pytest.fixture
def service():
    return CredentialService(CredentialConfig(secret_key="unit-secret", hash_iterations=1_000))


def test_hash_is_salted_and_verifies(service):
    first = service.hash_password("s3cret!")
    second = service.hash_password("s3cret!")

    assert first != second
    assert first.startswith("pbkdf2_sha256$1000$")
    assert service.verify_password("s3cret!", first)
    assert service.verify_password("s3cret!", second)
    assert not service.verify_password("wrong", first)


def test_hash_keeps_its_own_work_factor(service):
    stored = service.hash_password("s3cret!")
    stronger = CredentialService(CredentialConfig(secret_key="unit-secret", hash_iterations=5_000))

    assert stronger.verify_password("s3cret!", stored)


@pytest.mark.parametrize(
    "stored",
    ["", "not-a-hash", "pbkdf2_sha256$abc$00$00", "md5$1000$00$00", "pbkdf2_sha256$1000$zz$zz", None],
)
def test_verify_password_malformed_hash_returns_false(service, stored):
    assert service.verify_password("anything", stored) is False


def test_token_valid_until_seven_days(service):
    token = service.issue_token(42, now=T0)

    assert service.verify_token(token, now=T0) == 42
    assert service.verify_token(token, now=T0 + 6 * DAY + 23 * HOUR) == 42
    assert service.verify_token(token, now=T0 + 7 * DAY + 1 * HOUR) is None


def test_token_signed_with_other_secret_is_rejected(service):
    other = CredentialService(CredentialConfig(secret_key="other-secret"))
    token = other.issue_token(42, now=T0)

    assert service.verify_token(token, now=T0) is None


def test_tampered_token_is_rejected(service):
    header, payload, signature = service.issue_token(42, now=T0).split(".")
    forged_payload = security._b64_url_encode(b'{"sub":"1","iat":1700000000,"exp":9999999999}')

    assert service.verify_token(f"{header}.{forged_payload}.{signature}", now=T0) is None


@pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c", "....", "é.é.é"])
def test_garbage_token_is_rejected(service, token):
    assert service.verify_token(token, now=T0) is None


def bearer(token: str, scheme: str = "Bearer") -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme=scheme, credentials=token)


def test_gate_without_credentials_is_anonymous():
    identity = resolve_identity(None)

    assert identity.status is IdentityStatus.ANONYMOUS
    assert identity.user is None


def test_gate_with_other_scheme_is_anonymous(make_user):
    _, token = make_user()

    assert resolve_identity(bearer(token, scheme="Basic")).status is IdentityStatus.ANONYMOUS


def test_gate_with_invalid_token_is_rejected():
    identity = resolve_identity(bearer("not.a.token"))

    assert identity.status is IdentityStatus.REJECTED
    assert identity.reason == "Invalid or expired token"


def test_gate_with_token_for_missing_user_is_rejected():
    token = security.credentials.issue_token(9999)
    identity = resolve_identity(bearer(token))

    assert identity.status is IdentityStatus.REJECTED
    assert identity.reason == "User not found"


def test_gate_with_valid_token_is_authenticated_without_password(make_user):
    user, token = make_user(role="admin")
    identity = resolve_identity(bearer(token))

    assert identity.status is IdentityStatus.AUTHENTICATED
    assert identity.user["id"] == user["id"]
    assert identity.user["role"] == "admin"
    assert "password" not in identity.user


def test_role_gate_admits_allowed_roles():
    admin = {"id": 1, "role": "admin"}

    assert require_roles("admin")(current_user=admin) is admin
    assert require_roles("admin", "volunteer")(current_user={"id": 2, "role": "volunteer"})["id"] == 2


@pytest.mark.parametrize(
    "roles,message",
    [(("admin",), "Admin access required"), (("admin", "volunteer"), "Insufficient permissions")],
)
def test_role_gate_refuses_other_roles(roles, message):
    with pytest.raises(AuthorizationError, match=message) as excinfo:
        require_roles(*roles)(current_user={"id": 3, "role": "donor"})

    assert excinfo.value.status_code == 403
