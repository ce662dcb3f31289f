"""Identity extraction and role gate tests (no HTTP, no database)."""
import pytest
from types import SimpleNamespace

from framework.auth import (
    RoleGate,
    admin_only,
    authenticated,
    extract_identity,
    get_current_identity,
    staff_only,
)
from framework.exceptions.handler import AuthError, AuthzError
from framework.security import Identity, Role, TokenCodec


@pytest.fixture
def token(token_codec: TokenCodec) -> str:
    return token_codec.issue(5, Role.WORKER)


class TestExtractIdentity:

    def test_valid_bearer_header(self, token_codec, token):
        identity = extract_identity(f"Bearer {token}", token_codec)
        assert identity == Identity(subject_id=5, role=Role.WORKER)

    @pytest.mark.parametrize("header", [
        None,
        "",
        "Bearer",
        "Token abc",
    ])
    def test_missing_or_malformed_header(self, token_codec, header):
        with pytest.raises(AuthError) as exc_info:
            extract_identity(header, token_codec)
        assert exc_info.value.message == "Missing or invalid Authorization header"

    def test_empty_token_reaches_codec(self, token_codec):
        with pytest.raises(AuthError) as exc_info:
            extract_identity("Bearer ", token_codec)
        assert exc_info.value.message == "Invalid token"

    def test_prefix_is_case_sensitive(self, token_codec, token):
        with pytest.raises(AuthError) as exc_info:
            extract_identity(f"bearer {token}", token_codec)
        assert exc_info.value.message == "Missing or invalid Authorization header"

    def test_prefix_needs_single_space(self, token_codec, token):
        with pytest.raises(AuthError):
            extract_identity(f"Bearer  {token}", token_codec)

    def test_identity_is_attached_to_request_state(self, token_codec, token):
        request = SimpleNamespace(
            headers={"Authorization": f"Bearer {token}"},
            state=SimpleNamespace(),
        )
        identity = get_current_identity(request, token_codec)
        assert request.state.identity is identity


class TestRoleGate:

    def test_admin_only_denies_worker(self):
        with pytest.raises(AuthzError) as exc_info:
            admin_only.check(Identity(subject_id=1, role=Role.WORKER))
        assert "worker" in exc_info.value.message
        assert exc_info.value.status_code == 403

    def test_admin_only_approves_admin(self):
        identity = Identity(subject_id=1, role=Role.ADMIN)
        assert admin_only.check(identity) is identity

    @pytest.mark.parametrize("role,allowed", [
        (Role.ADMIN, True),
        (Role.WORKER, True),
        (Role.USER, False),
    ])
    def test_staff_only(self, role, allowed):
        identity = Identity(subject_id=1, role=role)
        if allowed:
            assert staff_only.check(identity) is identity
        else:
            with pytest.raises(AuthzError):
                staff_only.check(identity)

    @pytest.mark.parametrize("role", list(Role))
    def test_authenticated_allows_every_role(self, role):
        assert authenticated.check(Identity(subject_id=1, role=role)).role == role

    def test_membership_not_hierarchy(self):
        # A gate listing only workers does not let admins through
        workers = RoleGate(Role.WORKER)
        with pytest.raises(AuthzError):
            workers.check(Identity(subject_id=1, role=Role.ADMIN))

    def test_gate_passes_identity_through(self):
        identity = Identity(subject_id=9, role=Role.USER)
        assert authenticated(identity) is identity

    def test_authn_and_authz_errors_differ(self):
        assert AuthError("x").status_code == 401
        assert AuthzError("x").status_code == 403
