from __future__ import annotations

import pytest
from botocore.exceptions import ClientError, NoCredentialsError

from iam_lens.aws.identity_service import IdentityService
from iam_lens.exceptions import DataSourceError


class _StubSTS:
    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error
        self.calls = 0

    def get_caller_identity(self):
        self.calls += 1
        if self._error:
            raise self._error
        return self._response


class _StubSession:
    region_name = None

    def __init__(self, sts):
        self._sts = sts
        self.client_kwargs = None

    def client(self, name, **kwargs):
        assert name == "sts"
        self.client_kwargs = kwargs
        return self._sts


def test_identity_is_parsed_and_cached():
    sts = _StubSTS(
        {"Account": "123456789012", "UserId": "AIDAEXAMPLE", "Arn": "arn:aws:iam::123456789012:user/bob"}
    )
    service = IdentityService(_StubSession(sts))

    identity = service.get_caller_identity()
    assert identity.display_name == "bob"
    assert service.get_caller_identity() is identity
    assert sts.calls == 1


def test_sts_client_gets_fallback_region():
    session = _StubSession(_StubSTS({}))
    IdentityService(session)
    assert session.client_kwargs == {"region_name": "us-east-1"}


@pytest.mark.parametrize(
    "error",
    [
        NoCredentialsError(),
        ClientError({"Error": {"Code": "ExpiredToken", "Message": "expired"}}, "GetCallerIdentity"),
    ],
)
def test_failures_raise_data_source_error(error):
    service = IdentityService(_StubSession(_StubSTS(error=error)))
    with pytest.raises(DataSourceError) as exc:
        service.get_caller_identity()
    assert exc.value.operation == "get_caller_identity"
