import pytest

from avito_relay.core.errors import CredentialLookupError
from avito_relay.schemas.message import SendMessageRequest
from avito_relay.services.credential_resolver import CredentialResolver, Credentials


def _request(**fields) -> SendMessageRequest:
    return SendMessageRequest.model_validate({"chatId": "chat-1", "message": "hi", **fields})


def _resolver(store) -> CredentialResolver:
    return CredentialResolver(store, default_api_url="https://api.avito.ru")


def test_tiers_run_user_first():
    resolver = _resolver(store=None)
    assert resolver.tiers == (resolver.from_user, resolver.from_integration)


async def test_nothing_supplied_skips_every_lookup(store):
    creds = await _resolver(store).resolve(_request())

    assert creds is None
    assert store.lookups == []


async def test_user_tier_wins_and_short_circuits(store):
    store.add_user("user-1", "user-key", "https://custom.example")
    store.add_integration("int-1", "integration-key")

    creds = await _resolver(store).resolve(_request(userId="user-1", integrationId="int-1"))

    assert creds == Credentials(api_key="user-key", api_url="https://custom.example")
    assert store.lookups == [("user", "user-1")]


async def test_user_not_found_falls_through_to_integration(store):
    store.add_integration("int-1", "integration-key", None)

    creds = await _resolver(store).resolve(_request(userId="user-1", integrationId="int-1"))

    assert creds == Credentials(api_key="integration-key", api_url="https://api.avito.ru")


async def test_user_error_is_fatal_and_stops_resolution(store):
    cause = RuntimeError("db down")
    store.user_error = cause
    store.add_integration("int-1", "integration-key")

    with pytest.raises(CredentialLookupError) as excinfo:
        await _resolver(store).resolve(_request(userId="user-1", integrationId="int-1"))

    assert excinfo.value.cause is cause
    assert excinfo.value.body() == {"error": "Failed to get user credentials"}
    assert store.lookups == [("user", "user-1")]


async def test_integration_error_yields_no_credentials(store):
    store.integration_error = RuntimeError("db down")

    creds = await _resolver(store).resolve(_request(integrationId="int-1"))

    assert creds is None
    assert store.lookups == [("integration", "int-1")]


async def test_integration_without_joined_credential_yields_nothing(store):
    store.add_integration("int-1", "integration-key")
    store.integrations["int-1"].credential = None

    assert await _resolver(store).resolve(_request(integrationId="int-1")) is None


async def test_user_record_empty_url_uses_default(store):
    store.add_user("user-1", "user-key", "")

    creds = await _resolver(store).from_user(_request(userId="user-1"))

    assert creds.api_url == "https://api.avito.ru"
